"""
Presenters - the sequencer's view of the user interface.

QtPresenter shows real dialogs and marshals work onto the Qt main thread.
HeadlessPresenter answers from a script, for tests and unattended runs.
"""

import threading
from typing import Any, Callable, Dict, Optional, Sequence, TypeVar

from PyQt5.QtCore import QObject, QThread, Qt, pyqtSignal, pyqtSlot
from PyQt5.QtWidgets import QFileDialog, QWidget

from ..logging import logger
from .text_input_dialog import TextInputDialog

T = TypeVar("T")


def name_filter(allowed_types: Sequence[str]) -> str:
    """
    Build a QFileDialog name filter from file extensions.

    Args:
        allowed_types: Extensions such as "txt" or ".txt"; empty for any

    Returns:
        Filter string, e.g. "Allowed files (*.txt *.csv)"
    """
    patterns = [f"*.{t.lstrip('.')}" for t in allowed_types if t]
    if not patterns:
        return "All files (*)"
    return f"Allowed files ({' '.join(patterns)})"


class _PendingCall:
    """A callable handed to the UI thread together with its outcome."""

    def __init__(self, action: Callable[[], Any]):
        self._action = action
        self._value: Any = None
        self._error: Optional[BaseException] = None

    def run(self) -> None:
        try:
            self._value = self._action()
        except BaseException as e:
            self._error = e

    def result(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._value


class QtPresenter(QObject):
    """
    Presentation collaborator backed by Qt dialogs.

    Must be created on the thread that runs the Qt event loop. Calls made
    from any other thread are posted to it with a blocking queued
    connection, so the caller resumes only after the UI work has finished.
    """

    _call_requested = pyqtSignal(object)  # _PendingCall

    def __init__(self, parent_widget: Optional[QWidget] = None, parent: Optional[QObject] = None):
        """
        Initialize the presenter.

        Args:
            parent_widget: Widget the dialogs are parented to
            parent: Optional QObject parent
        """
        super().__init__(parent)
        self._parent_widget = parent_widget
        self._text_dialogs: Dict[str, TextInputDialog] = {}
        self._call_requested.connect(self._run_call, Qt.BlockingQueuedConnection)

    def is_ui_thread(self) -> bool:
        """Check whether the caller is on the presenter's thread."""
        return QThread.currentThread() is self.thread()

    def dispatch(self, action: Callable[[], T]) -> T:
        """Run action on the UI thread and block until it completes."""
        if self.is_ui_thread():
            return action()

        call = _PendingCall(action)
        logger.debug("Handing call off to the UI thread")
        self._call_requested.emit(call)
        return call.result()

    @pyqtSlot(object)
    def _run_call(self, call: _PendingCall) -> None:
        call.run()

    def request_text_input(self, title: str, initial_value: str) -> Optional[str]:
        return self.dispatch(lambda: self._text_dialog(title).prompt(initial_value))

    def _text_dialog(self, title: str) -> TextInputDialog:
        """Realize the dialog for title on first use and reuse it afterwards."""
        dialog = self._text_dialogs.get(title)
        if dialog is None:
            dialog = TextInputDialog(title, self._parent_widget)
            self._text_dialogs[title] = dialog
        return dialog

    def widget_for(self, title: str) -> Optional[TextInputDialog]:
        return self._text_dialogs.get(title)

    def request_path_selection(
        self,
        title: str,
        allowed_types: Sequence[str],
        allow_directories: bool,
    ) -> Optional[str]:
        def choose() -> Optional[str]:
            dialog = self.build_file_dialog(title, allowed_types, allow_directories)
            if not dialog.exec_():
                return None
            selected = dialog.selectedFiles()
            return selected[0] if selected else None

        return self.dispatch(choose)

    def build_file_dialog(
        self,
        title: str,
        allowed_types: Sequence[str],
        allow_directories: bool,
    ) -> QFileDialog:
        """
        Create the file chooser for a path selection.

        With allow_directories the chooser picks directories; matching
        files stay visible for orientation.
        """
        dialog = QFileDialog(self._parent_widget, title)
        dialog.setAcceptMode(QFileDialog.AcceptOpen)
        dialog.setNameFilter(name_filter(allowed_types))
        if allow_directories:
            dialog.setFileMode(QFileDialog.Directory)
            dialog.setOption(QFileDialog.ShowDirsOnly, not allowed_types)
        else:
            dialog.setFileMode(QFileDialog.ExistingFile)
        return dialog


class HeadlessPresenter:
    """
    Presenter that answers prompts from a script.

    Text prompts missing from text_answers accept their initial value;
    path selections missing from path_answers are cancelled. An answer of
    None cancels. A list of answers is consumed one per request.
    """

    def __init__(
        self,
        text_answers: Optional[Dict[str, Any]] = None,
        path_answers: Optional[Dict[str, Any]] = None,
    ):
        self._text_answers = dict(text_answers or {})
        self._path_answers = dict(path_answers or {})
        self.requests: list[tuple] = []
        self.dispatch_threads: list[str] = []

    def dispatch(self, action: Callable[[], T]) -> T:
        self.dispatch_threads.append(threading.current_thread().name)
        return action()

    def request_text_input(self, title: str, initial_value: str) -> Optional[str]:
        self.requests.append(("text", title, initial_value))
        if title not in self._text_answers:
            return initial_value
        return self._next_answer(self._text_answers, title)

    def request_path_selection(
        self,
        title: str,
        allowed_types: Sequence[str],
        allow_directories: bool,
    ) -> Optional[str]:
        self.requests.append(("path", title, list(allowed_types), allow_directories))
        if title not in self._path_answers:
            return None
        return self._next_answer(self._path_answers, title)

    def widget_for(self, title: str) -> Optional[Any]:
        return None

    @staticmethod
    def _next_answer(answers: Dict[str, Any], title: str) -> Optional[Any]:
        answer = answers[title]
        if isinstance(answer, list):
            return answer.pop(0) if answer else None
        return answer
