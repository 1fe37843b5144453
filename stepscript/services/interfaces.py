"""
Service interfaces (Protocols) for dependency injection and testing.

These protocols define the contracts the sequencer consumes, so the Qt
presentation layer can be swapped for a scripted one in tests.
"""

from typing import Any, Callable, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class IPresenter(Protocol):
    """Interface for the presentation collaborator."""

    def request_text_input(self, title: str, initial_value: str) -> Optional[str]:
        """
        Ask the user for a line of text.

        Args:
            title: Prompt title
            initial_value: Text pre-filled in the field

        Returns:
            The accepted text, or None if the user cancelled
        """
        ...

    def request_path_selection(
        self,
        title: str,
        allowed_types: Sequence[str],
        allow_directories: bool,
    ) -> Optional[str]:
        """
        Ask the user to choose a file-system path.

        Args:
            title: Chooser title
            allowed_types: File extensions accepted (empty for any)
            allow_directories: Whether directories may be chosen

        Returns:
            The chosen path, or None if the user cancelled
        """
        ...

    def dispatch(self, action: Callable[[], T]) -> T:
        """
        Run action on the UI thread and block until it completes.

        Returns the action's value; exceptions raised by the action are
        re-raised in the caller's thread.
        """
        ...

    def widget_for(self, title: str) -> Optional[Any]:
        """Return the input widget realized for title, if any."""
        ...
