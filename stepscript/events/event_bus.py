"""
EventBus - Central event dispatcher for sequencer lifecycle events.

Lets views follow a run (progress bars, status lines) without the
sequencer knowing about them.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal


# ============================================================================
# Event Data Classes
# ============================================================================


@dataclass
class SequencerEvent:
    """Base class for sequencer events."""
    pass


@dataclass
class StepStartedEvent(SequencerEvent):
    """Emitted right before a step is dispatched."""
    step_id: str
    name: str
    execution_context: str  # 'worker' or 'presentation'


@dataclass
class StepFinishedEvent(SequencerEvent):
    """Emitted once a step's outcome is known."""
    step_id: str
    outcome: str  # 'continue', 'branch', 'cancel', 'fail'
    activated: Optional[List[str]] = None


@dataclass
class SequencerFinishedEvent(SequencerEvent):
    """Emitted when a run reaches a terminal state."""
    state: str  # 'completed', 'cancelled', 'failed'
    error: Optional[str] = None
    history: Optional[List[str]] = None


@dataclass
class ProgressEvent(SequencerEvent):
    """Emitted for progress updates during a run."""
    message: str
    progress: float  # 0-100, -1 for indeterminate


# ============================================================================
# Event Bus Implementation
# ============================================================================


class EventBus(QObject):
    """
    Central event dispatcher using Qt signals.

    Usage:
        bus = EventBus.instance()

        # Subscribe
        bus.step_finished.connect(my_handler)

        # Emit
        bus.emit(StepFinishedEvent(step_id="ask_name", outcome="continue"))
    """

    # Typed signals for each event category
    step_started = pyqtSignal(object)        # StepStartedEvent
    step_finished = pyqtSignal(object)       # StepFinishedEvent
    sequencer_finished = pyqtSignal(object)  # SequencerFinishedEvent
    progress = pyqtSignal(object)            # ProgressEvent

    # Singleton instance
    _instance: Optional["EventBus"] = None

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._event_log: List[SequencerEvent] = []
        self._log_events = False

    @classmethod
    def instance(cls) -> "EventBus":
        """Get the singleton EventBus instance."""
        if cls._instance is None:
            cls._instance = EventBus()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None

    def enable_logging(self, enable: bool = True) -> None:
        """Enable/disable event logging for debugging."""
        self._log_events = enable

    def get_event_log(self) -> List[SequencerEvent]:
        """Get logged events (for debugging/testing)."""
        return list(self._event_log)

    def clear_event_log(self) -> None:
        """Clear the event log."""
        self._event_log.clear()

    def emit(self, event: SequencerEvent) -> None:
        """
        Emit an event to the appropriate signal.

        Args:
            event: Event instance to emit
        """
        if self._log_events:
            self._event_log.append(event)

        # Route to appropriate signal based on event type
        if isinstance(event, StepStartedEvent):
            self.step_started.emit(event)
        elif isinstance(event, StepFinishedEvent):
            self.step_finished.emit(event)
        elif isinstance(event, SequencerFinishedEvent):
            self.sequencer_finished.emit(event)
        elif isinstance(event, ProgressEvent):
            self.progress.emit(event)

    def emit_progress(self, message: str, progress: float) -> None:
        """Emit a progress event."""
        self.emit(ProgressEvent(message=message, progress=progress))
