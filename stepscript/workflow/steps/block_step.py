"""
Block Step

Runs an arbitrary action against the shared state.
"""

from typing import Any, Callable, Optional

from ..context import WorkflowContext
from .base import BaseStep, StepOutcome

BlockAction = Callable[[WorkflowContext], Any]


class BlockStep(BaseStep):
    """
    A unit of work wrapping a callable.

    The action receives the WorkflowContext. Returning None continues the
    chain, returning a StepOutcome hands that outcome to the sequencer, and
    any other return value is stored as the step's result. Raising
    StepError fails the run with that error.
    """

    def __init__(
        self,
        step_id: str,
        action: BlockAction,
        name: Optional[str] = None,
        run_on_main_thread: bool = False,
    ):
        super().__init__(step_id, name, run_on_main_thread)
        self.action = action

    def run(self, context: WorkflowContext) -> StepOutcome:
        result = self.action(context)
        if isinstance(result, StepOutcome):
            return result
        if result is not None:
            context.set_step_result(self.step_id, result)
        return StepOutcome.proceed()
