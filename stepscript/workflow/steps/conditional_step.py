"""
Conditional Step

Evaluates a predicate and activates a set of predicated steps when it holds.
"""

from typing import Callable, Optional, Union

from ..context import WorkflowContext
from .base import BaseStep, StepOutcome

Predicate = Callable[[WorkflowContext], bool]


class ConditionalStep(BaseStep):
    """
    Branch point of a step chain.

    Predicated steps are referenced by id only; the sequencer owns them.
    Membership is a set kept in insertion order, so adding the same step
    twice activates it once per evaluation.
    """

    def __init__(
        self,
        step_id: str,
        predicate: Predicate,
        name: Optional[str] = None,
        run_on_main_thread: bool = False,
    ):
        super().__init__(step_id, name, run_on_main_thread)
        self.predicate = predicate
        self.conditional_result: Optional[bool] = None
        self._predicated_steps: dict[str, None] = {}

    def add_predicated_step(self, step: Union[BaseStep, str]):
        """
        Activate a step whenever the predicate evaluates true.

        Args:
            step: Step instance or step id; duplicates are ignored
        """
        step_id = step.step_id if isinstance(step, BaseStep) else step
        self._predicated_steps.setdefault(step_id, None)

    @property
    def predicated_steps(self) -> tuple[str, ...]:
        """Predicated step ids in the order they were added."""
        return tuple(self._predicated_steps)

    def run(self, context: WorkflowContext) -> StepOutcome:
        self.conditional_result = bool(self.predicate(context))
        if self.conditional_result:
            return StepOutcome.branch(self.predicated_steps)
        return StepOutcome.proceed()
