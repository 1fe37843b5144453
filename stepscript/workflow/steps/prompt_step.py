"""
Prompt Step

Asks the user for a text value and stores it in the context.
"""

from abc import abstractmethod
from typing import Any, Optional, TYPE_CHECKING

from ..context import WorkflowContext
from .base import BaseStep, Cancelled, StepError, StepOutcome

if TYPE_CHECKING:
    from ...services.interfaces import IPresenter


class InputStep(BaseStep):
    """
    Base for steps that collect a value through the presenter.

    Input steps always run on the UI thread. The value is written to the
    context under output_key only when the user accepts.
    """

    def __init__(
        self,
        step_id: str,
        title: str,
        output_key: str,
        error_if_cancelled: bool = False,
        name: Optional[str] = None,
        presenter: Optional["IPresenter"] = None,
    ):
        super().__init__(step_id, name or title, run_on_main_thread=True)
        self.title = title
        self.output_key = output_key
        self.error_if_cancelled = error_if_cancelled
        self.presenter = presenter

    def bind_presenter(self, presenter: "IPresenter"):
        """Attach the presenter used when no explicit one was given."""
        if self.presenter is None:
            self.presenter = presenter

    def run(self, context: WorkflowContext) -> StepOutcome:
        if self.presenter is None:
            raise StepError(f"No presenter available for {self.title!r}", self.step_id)

        context.report_progress(f"Waiting for input: {self.title}...")
        value = self.request_value(context)

        if value is None:
            if self.error_if_cancelled:
                return StepOutcome.fail(
                    Cancelled(f"{self.title} cancelled", self.step_id)
                )
            return StepOutcome.proceed()

        context.set(self.output_key, value)
        return StepOutcome.proceed()

    @abstractmethod
    def request_value(self, context: WorkflowContext) -> Optional[Any]:
        """Ask the presenter for a value; None means the user cancelled."""
        pass


class PromptStep(InputStep):
    """
    Shows a text field pre-filled with initial_value.

    Any string is accepted. With prefill_from_context set, a value already
    stored under output_key is shown instead of initial_value.
    """

    def __init__(
        self,
        step_id: str,
        title: str,
        output_key: str,
        initial_value: Any = "",
        error_if_cancelled: bool = False,
        name: Optional[str] = None,
        presenter: Optional["IPresenter"] = None,
        prefill_from_context: bool = False,
    ):
        super().__init__(step_id, title, output_key, error_if_cancelled, name, presenter)
        self.initial_value = initial_value
        self.prefill_from_context = prefill_from_context
        self.text_field: Optional[Any] = None

    def request_value(self, context: WorkflowContext) -> Optional[str]:
        initial = self.initial_value
        if self.prefill_from_context:
            initial = context.get(self.output_key, initial)
        initial = "" if initial is None else str(initial)

        value = self.presenter.request_text_input(self.title, initial)

        if self.text_field is None:
            self.text_field = self.presenter.widget_for(self.title)
        return value
