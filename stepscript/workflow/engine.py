"""
Sequencer

Drives a chain of steps one at a time, dispatching each to its execution
context and applying the outcome it returns.
"""

from collections import deque
from enum import Enum
from typing import Any, Callable, Iterable, Optional, TYPE_CHECKING

from ..logging import logger
from ..models.config import SequencerConfig
from .context import WorkflowContext
from .steps.base import (
    ActionFailed,
    BaseStep,
    ExecutionContext,
    OutcomeKind,
    StepError,
    StepOutcome,
)
from .steps.conditional_step import ConditionalStep
from .steps.prompt_step import InputStep

if TYPE_CHECKING:
    from ..events.event_bus import EventBus
    from ..services.interfaces import IPresenter


class SequencerError(Exception):
    """Exception raised when a sequencer is misused or misconfigured."""

    def __init__(self, message: str, step_id: Optional[str] = None):
        self.step_id = step_id
        super().__init__(message)


class ConfigurationError(SequencerError):
    """The step chain is inconsistent (duplicate or unregistered steps)."""


class SequencerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (
            SequencerState.COMPLETED,
            SequencerState.CANCELLED,
            SequencerState.FAILED,
        )


class Sequencer:
    """
    Executes a chain of steps against one shared WorkflowContext.

    Features:
    - Implicit chain order plus branch fan-out from conditional steps
    - UI-thread hand-off for steps that require it
    - Progress reporting callbacks and optional EventBus events
    - Validation of the step registry before execution

    A sequencer runs once. Build a fresh one to run the chain again.
    """

    def __init__(
        self,
        steps: Iterable[BaseStep],
        presenter: Optional["IPresenter"] = None,
        branch_steps: Optional[Iterable[BaseStep]] = None,
        config: Optional[SequencerConfig] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
        event_bus: Optional["EventBus"] = None,
    ):
        """
        Initialize the sequencer.

        Args:
            steps: The implicit chain, in execution order
            presenter: Presentation collaborator for UI-thread work and input
            branch_steps: Steps only reachable through a conditional branch
            config: Sequencer settings
            progress_callback: Optional callback for progress updates (message, percent)
            event_bus: Bus to publish lifecycle events on; defaults to the
                singleton when config.use_event_bus is set

        Raises:
            ConfigurationError: If the chain fails validation
        """
        self._chain: list[BaseStep] = list(steps)
        self._branch_only: list[BaseStep] = list(branch_steps or [])
        self._presenter = presenter
        self._config = config or SequencerConfig()
        self._progress_callback = progress_callback

        if event_bus is None and self._config.use_event_bus:
            from ..events.event_bus import EventBus
            event_bus = EventBus.instance()
        self._event_bus = event_bus

        self._steps: dict[str, BaseStep] = {}
        for step in self._chain + self._branch_only:
            self._steps.setdefault(step.step_id, step)

        if presenter is not None:
            for step in self._steps.values():
                if isinstance(step, InputStep):
                    step.bind_presenter(presenter)

        self.state = SequencerState.IDLE
        self.error: Optional[StepError] = None
        self.context: Optional[WorkflowContext] = None
        self.history: list[str] = []
        self._owns_context = False

        self._raise_if_invalid()

    def validate(self) -> list[str]:
        """
        Validate the step registry.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self._chain:
            errors.append("Sequencer has no steps")

        # Same id must mean the same step object
        seen: dict[str, BaseStep] = {}
        for step in self._chain + self._branch_only:
            other = seen.setdefault(step.step_id, step)
            if other is not step:
                errors.append(f"Duplicate step ID: {step.step_id}")

        for step in self._steps.values():
            if isinstance(step, ConditionalStep):
                for target in step.predicated_steps:
                    if target not in self._steps:
                        errors.append(
                            f"Step '{step.step_id}' activates unregistered step '{target}'"
                        )
            elif isinstance(step, InputStep) and step.presenter is None:
                errors.append(f"Step '{step.step_id}' needs a presenter")

        return errors

    def _raise_if_invalid(self):
        errors = self.validate()
        if errors:
            raise ConfigurationError(f"Sequencer validation failed: {'; '.join(errors)}")

    def run(
        self,
        context: Optional[WorkflowContext] = None,
        initial_values: Optional[dict[str, Any]] = None,
    ) -> SequencerState:
        """
        Run the chain to a terminal state.

        Step failures do not raise; they end the run in FAILED with the
        reason stored in self.error. State written by earlier steps is kept.

        Args:
            context: Optional pre-configured context
            initial_values: Optional initial variable values

        Returns:
            The terminal SequencerState

        Raises:
            SequencerError: If this sequencer has already been run
            ConfigurationError: If a conditional now targets an unregistered step
        """
        if self.state is not SequencerState.IDLE:
            raise SequencerError(f"Sequencer already {self.state.value}")

        # Predicated steps may have been added since construction
        self._raise_if_invalid()

        self._owns_context = context is None
        if context is None:
            context = WorkflowContext(
                initial_values=initial_values,
                progress_callback=self._progress_callback,
            )
        elif initial_values:
            for key, value in initial_values.items():
                context.set(key, value)

        self.context = context
        self.state = SequencerState.RUNNING
        logger.debug(f"Sequencer started with {len(self._chain)} chained steps")

        queue = deque(step.step_id for step in self._chain)
        branch_activated: set[str] = set()

        while queue:
            if context.is_cancelled:
                logger.info(f"Sequencer cancelled before step '{queue[0]}'")
                self._finish(SequencerState.CANCELLED)
                return self.state

            step = self._steps[queue.popleft()]
            self._report_progress(
                f"Executing: {step.name}",
                len(self.history) * 100 / (len(self.history) + len(queue) + 1),
            )

            outcome = self._execute_step(step, context)
            self.history.append(step.step_id)
            self._emit_step_finished(step, outcome)

            if outcome.kind is OutcomeKind.CANCEL:
                self._finish(SequencerState.CANCELLED)
                return self.state

            if outcome.kind is OutcomeKind.FAIL:
                reason = outcome.reason or ActionFailed("Step failed", step.step_id)
                if not reason.step_id:
                    reason.step_id = step.step_id
                self.error = reason
                logger.warning(f"Step '{step.step_id}' failed: {reason}")
                self._report_progress(f"Step '{step.name}' failed: {reason}", -1)
                self._finish(SequencerState.FAILED)
                return self.state

            if outcome.kind is OutcomeKind.BRANCH:
                try:
                    activated = self._activations(outcome.steps, branch_activated)
                except ConfigurationError:
                    self._finish(SequencerState.FAILED)
                    raise
                # Branch runs ahead of the rest of the chain, in insertion order
                queue.extendleft(reversed(activated))

        self._report_progress("Sequence completed successfully", 100)
        self._finish(SequencerState.COMPLETED)
        return self.state

    def _activations(self, step_ids: tuple[str, ...], already: set[str]) -> list[str]:
        """Resolve a branch outcome to the ids to enqueue."""
        activated = []
        for step_id in dict.fromkeys(step_ids):
            if step_id not in self._steps:
                raise ConfigurationError(
                    f"Branch activates unregistered step '{step_id}'", step_id
                )
            if self._config.deduplicate_branch_activations and step_id in already:
                logger.debug(f"Skipping repeated activation of '{step_id}'")
                continue
            already.add(step_id)
            activated.append(step_id)
        return activated

    def _execute_step(self, step: BaseStep, context: WorkflowContext) -> StepOutcome:
        """Dispatch a step to its execution context and map exceptions to FAIL."""
        logger.debug(f"Dispatching {step!r} on {step.execution_context.value}")
        self._emit_step_started(step)

        presenter = self._presenter or getattr(step, "presenter", None)

        try:
            if (
                step.execution_context is ExecutionContext.PRESENTATION
                and presenter is not None
            ):
                outcome = presenter.dispatch(lambda: step.run(context))
            else:
                outcome = step.run(context)
        except StepError as e:
            if not e.step_id:
                e.step_id = step.step_id
            return StepOutcome.fail(e)
        except Exception as e:
            logger.debug(f"Step '{step.step_id}' raised", exc_info=True)
            return StepOutcome.fail(ActionFailed(f"Unexpected error: {e}", step.step_id))

        if not isinstance(outcome, StepOutcome):
            return StepOutcome.fail(
                ActionFailed(f"Step returned {outcome!r} instead of an outcome", step.step_id)
            )
        return outcome

    def _finish(self, state: SequencerState):
        self.state = state
        logger.info(f"Sequencer {state.value} after {len(self.history)} steps")
        if self._event_bus:
            from ..events.event_bus import SequencerFinishedEvent
            self._event_bus.emit(SequencerFinishedEvent(
                state=state.value,
                error=str(self.error) if self.error else None,
                history=list(self.history),
            ))

    def _emit_step_started(self, step: BaseStep):
        if self._event_bus:
            from ..events.event_bus import StepStartedEvent
            self._event_bus.emit(StepStartedEvent(
                step_id=step.step_id,
                name=step.name,
                execution_context=step.execution_context.value,
            ))

    def _emit_step_finished(self, step: BaseStep, outcome: StepOutcome):
        if self._event_bus:
            from ..events.event_bus import StepFinishedEvent
            self._event_bus.emit(StepFinishedEvent(
                step_id=step.step_id,
                outcome=outcome.kind.value,
                activated=list(outcome.steps) if outcome.steps else None,
            ))

    def _report_progress(self, message: str, percent: float):
        """Report progress to the context and the event bus."""
        if self.context is not None:
            self.context.report_progress(message, percent)
        if self._progress_callback and not self._owns_context:
            self._progress_callback(message, percent)
        if self._event_bus:
            self._event_bus.emit_progress(message, percent)

    def get_step(self, step_id: str) -> Optional[BaseStep]:
        """Get a registered step by its ID."""
        return self._steps.get(step_id)

    def get_steps(self) -> list[BaseStep]:
        """Get the implicit chain in definition order."""
        return self._chain.copy()


class SequenceBuilder:
    """
    Fluent helper for assembling a Sequencer.

    Example:
        sequencer = (
            SequenceBuilder()
            .then(PromptStep("ask", "Your name", output_key="name"))
            .then(check)
            .register(greet)
            .build(presenter=QtPresenter())
        )
    """

    def __init__(self):
        self._chain: list[BaseStep] = []
        self._branch_only: list[BaseStep] = []

    def then(self, step: BaseStep) -> "SequenceBuilder":
        """Append a step to the implicit chain."""
        self._chain.append(step)
        return self

    def register(self, *steps: BaseStep) -> "SequenceBuilder":
        """Register steps that only run when a conditional activates them."""
        self._branch_only.extend(steps)
        return self

    def build(
        self,
        presenter: Optional["IPresenter"] = None,
        config: Optional[SequencerConfig] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
        event_bus: Optional["EventBus"] = None,
    ) -> Sequencer:
        """
        Build the sequencer.

        Raises:
            ConfigurationError: If the chain fails validation
        """
        return Sequencer(
            self._chain,
            presenter=presenter,
            branch_steps=self._branch_only,
            config=config,
            progress_callback=progress_callback,
            event_bus=event_bus,
        )
