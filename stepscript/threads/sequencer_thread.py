"""
SequencerThread - Background thread that drives a Sequencer.

Keeps the Qt event loop free while steps run; steps that need the UI
thread are handed back to it by the sequencer's presenter.
"""

from typing import Any, Optional

from PyQt5.QtCore import QThread, pyqtSignal

from ..logging import logger
from ..workflow.context import WorkflowContext
from ..workflow.engine import Sequencer, SequencerError, SequencerState


class SequencerThread(QThread):
    """
    Runs one Sequencer off the UI thread.

    Qt Signals:
    - progress_signal: (message, percent) for each progress report
    - sequence_finished_signal: (state, error message or "")
    """

    progress_signal = pyqtSignal(str, float)
    sequence_finished_signal = pyqtSignal(str, str)

    def __init__(
        self,
        sequencer: Sequencer,
        initial_values: Optional[dict[str, Any]] = None,
        parent=None,
    ):
        """
        Initialize the sequencer thread.

        Args:
            sequencer: Sequencer to run; it must not have run yet
            initial_values: Initial shared state
            parent: Optional QThread parent
        """
        super().__init__(parent)
        self.sequencer = sequencer
        self.context = WorkflowContext(
            initial_values=initial_values,
            progress_callback=self._emit_progress,
        )

    def run(self):
        """Execute the sequencer in the background thread."""
        try:
            state = self.sequencer.run(self.context)
        except SequencerError as e:
            logger.error(f"Sequencer could not run: {e}")
            self.sequence_finished_signal.emit(SequencerState.FAILED.value, str(e))
            return

        error = self.sequencer.error
        self.sequence_finished_signal.emit(state.value, str(error) if error else "")

    def cancel(self):
        """Stop the run before its next step; the current step completes."""
        self.context.cancel()

    def _emit_progress(self, message: str, percent: float) -> None:
        self.progress_signal.emit(message, float(percent))
