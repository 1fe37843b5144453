"""
Base Workflow Step

Abstract base class, outcome type and error taxonomy shared by all steps.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..context import WorkflowContext


class StepError(Exception):
    """Exception raised when a workflow step fails."""

    def __init__(self, message: str, step_id: str = ""):
        self.step_id = step_id
        super().__init__(message)


class Cancelled(StepError):
    """The user declined to provide input."""


class ActionFailed(StepError):
    """A step action or predicate reported failure."""

    def __init__(self, detail: str, step_id: str = ""):
        self.detail = detail
        super().__init__(detail, step_id)


class ExecutionContext(Enum):
    """Where the sequencer dispatches a step."""
    WORKER = "worker"
    PRESENTATION = "presentation"


class OutcomeKind(Enum):
    """What the sequencer should do after a step returns."""
    CONTINUE = "continue"
    BRANCH = "branch"
    CANCEL = "cancel"
    FAIL = "fail"


@dataclass(frozen=True, eq=False)
class StepOutcome:
    """Signal returned by a step's run(). Read-only once built."""

    kind: OutcomeKind
    steps: tuple[str, ...] = ()
    reason: Optional[StepError] = None

    @classmethod
    def proceed(cls) -> "StepOutcome":
        """Advance to the implicit next step."""
        return cls(OutcomeKind.CONTINUE)

    @classmethod
    def branch(cls, step_ids: Iterable[str]) -> "StepOutcome":
        """Run the given steps before resuming the chain."""
        return cls(OutcomeKind.BRANCH, steps=tuple(step_ids))

    @classmethod
    def cancel(cls) -> "StepOutcome":
        """Stop the run in the Cancelled state."""
        return cls(OutcomeKind.CANCEL)

    @classmethod
    def fail(cls, reason: StepError) -> "StepOutcome":
        """Stop the run in the Failed state, surfacing reason."""
        return cls(OutcomeKind.FAIL, reason=reason)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (OutcomeKind.CANCEL, OutcomeKind.FAIL)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StepOutcome):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.steps == other.steps
            and self.reason is other.reason
        )

    def __repr__(self) -> str:
        if self.kind is OutcomeKind.BRANCH:
            return f"StepOutcome.branch({list(self.steps)!r})"
        if self.kind is OutcomeKind.FAIL:
            return f"StepOutcome.fail({self.reason!r})"
        return f"StepOutcome.{self.kind.value}"


class BaseStep(ABC):
    """
    Abstract base class for workflow steps.

    Each step type (block, conditional, prompt, path selection) inherits
    from this and implements run(). Steps never invoke each other; all
    chaining goes through the returned StepOutcome.
    """

    def __init__(
        self,
        step_id: str,
        name: Optional[str] = None,
        run_on_main_thread: bool = False,
    ):
        """
        Initialize the step.

        Args:
            step_id: Unique identifier for this step within a sequencer
            name: Human-readable name
            run_on_main_thread: Dispatch on the UI thread instead of the worker
        """
        if not step_id:
            raise ValueError("step_id must be a non-empty string")
        self.step_id = step_id
        self.name = name or step_id
        self._run_on_main_thread = run_on_main_thread

    @property
    def run_on_main_thread(self) -> bool:
        """Whether the sequencer must dispatch this step on the UI thread."""
        return self._run_on_main_thread

    @property
    def execution_context(self) -> ExecutionContext:
        if self.run_on_main_thread:
            return ExecutionContext.PRESENTATION
        return ExecutionContext.WORKER

    @abstractmethod
    def run(self, context: WorkflowContext) -> StepOutcome:
        """
        Execute the step.

        Args:
            context: Shared state for the current run

        Returns:
            StepOutcome telling the sequencer what runs next
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.step_id!r}, name={self.name!r})"
