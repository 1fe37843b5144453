"""
Path Selection Step

Asks the user to choose a file or directory.
"""

from typing import Iterable, Optional, TYPE_CHECKING

from ..context import WorkflowContext
from .prompt_step import InputStep

if TYPE_CHECKING:
    from ...services.interfaces import IPresenter


class PathSelectionStep(InputStep):
    """Stores the chosen path under output_key."""

    def __init__(
        self,
        step_id: str,
        title: str,
        output_key: str,
        allowed_file_types: Optional[Iterable[str]] = None,
        allow_directories: bool = False,
        error_if_cancelled: bool = False,
        name: Optional[str] = None,
        presenter: Optional["IPresenter"] = None,
    ):
        """
        Initialize the path selection step.

        Args:
            step_id: Step identifier
            title: Chooser title
            output_key: Context key receiving the chosen path
            allowed_file_types: Extensions like "txt" or ".txt"; empty means any
            allow_directories: Whether a directory may be chosen
            error_if_cancelled: Fail the run instead of continuing on cancel
            name: Human-readable name
            presenter: Presenter to use instead of the sequencer's
        """
        super().__init__(step_id, title, output_key, error_if_cancelled, name, presenter)
        self.allowed_file_types = [
            t.lstrip(".").lower() for t in (allowed_file_types or []) if t
        ]
        self.allow_directories = allow_directories

    def request_value(self, context: WorkflowContext) -> Optional[str]:
        return self.presenter.request_path_selection(
            self.title,
            list(self.allowed_file_types),
            self.allow_directories,
        )
