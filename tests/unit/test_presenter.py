"""
Unit tests for the presenters and the text input dialog.
"""

import threading
from unittest.mock import MagicMock, patch

import pytest
from PyQt5.QtWidgets import QDialog, QFileDialog

from stepscript.ui.presenter import HeadlessPresenter, QtPresenter, name_filter
from stepscript.ui.text_input_dialog import TextInputDialog


class TestNameFilter:
    """Tests for name_filter()."""

    def test_any_type(self):
        assert name_filter([]) == "All files (*)"

    def test_extensions(self):
        assert name_filter(["txt", ".csv"]) == "Allowed files (*.txt *.csv)"


class TestHeadlessPresenter:
    """Tests for HeadlessPresenter."""

    def test_dispatch_runs_inline(self):
        presenter = HeadlessPresenter()
        assert presenter.dispatch(lambda: 7) == 7
        assert presenter.dispatch_threads == [threading.current_thread().name]

    def test_text_answer_list_consumed_in_order(self):
        presenter = HeadlessPresenter(text_answers={"Name": ["first", None]})
        assert presenter.request_text_input("Name", "") == "first"
        assert presenter.request_text_input("Name", "") is None
        assert presenter.request_text_input("Name", "") is None

    def test_unknown_path_is_cancelled(self):
        assert HeadlessPresenter().request_path_selection("Pick", [], False) is None

    def test_no_widget(self):
        assert HeadlessPresenter().widget_for("Name") is None


class TestTextInputDialog:
    """Tests for TextInputDialog."""

    def test_set_text(self, qapp):
        dialog = TextInputDialog("Project name")
        dialog.set_text("untitled")

        assert dialog.text() == "untitled"
        assert dialog.windowTitle() == "Project name"

    def test_prompt_accepted(self, qapp):
        dialog = TextInputDialog("Project name")
        with patch.object(TextInputDialog, "exec_", return_value=QDialog.Accepted):
            assert dialog.prompt("draft") == "draft"

    def test_prompt_rejected(self, qapp):
        dialog = TextInputDialog("Project name")
        with patch.object(TextInputDialog, "exec_", return_value=QDialog.Rejected):
            assert dialog.prompt("draft") is None


class TestQtPresenter:
    """Tests for QtPresenter on the UI thread."""

    def test_is_ui_thread(self, qapp):
        assert QtPresenter().is_ui_thread()

    def test_dispatch_inline_on_ui_thread(self, qapp):
        presenter = QtPresenter()
        assert presenter.dispatch(lambda: threading.current_thread()) is threading.current_thread()

    def test_dispatch_reraises(self, qapp):
        presenter = QtPresenter()

        def boom():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            presenter.dispatch(boom)

    def test_text_dialog_realized_once(self, qapp):
        presenter = QtPresenter()
        assert presenter.widget_for("Name") is None

        with patch.object(TextInputDialog, "exec_", return_value=QDialog.Accepted):
            assert presenter.request_text_input("Name", "Alice") == "Alice"
            first = presenter.widget_for("Name")
            presenter.request_text_input("Name", "Bob")

        assert isinstance(first, TextInputDialog)
        assert presenter.widget_for("Name") is first

    def test_text_input_cancelled(self, qapp):
        presenter = QtPresenter()
        with patch.object(TextInputDialog, "exec_", return_value=QDialog.Rejected):
            assert presenter.request_text_input("Name", "Alice") is None

    def test_path_selection_accepted(self, qapp):
        presenter = QtPresenter()
        dialog = MagicMock()
        dialog.exec_.return_value = QDialog.Accepted
        dialog.selectedFiles.return_value = ["/data/in.csv"]

        with patch.object(presenter, "build_file_dialog", return_value=dialog) as build:
            path = presenter.request_path_selection("Input", ["csv"], False)

        assert path == "/data/in.csv"
        build.assert_called_once_with("Input", ["csv"], False)

    def test_path_selection_cancelled(self, qapp):
        presenter = QtPresenter()
        dialog = MagicMock()
        dialog.exec_.return_value = QDialog.Rejected

        with patch.object(presenter, "build_file_dialog", return_value=dialog):
            assert presenter.request_path_selection("Input", [], False) is None

    def test_file_dialog_for_files(self, qapp):
        dialog = QtPresenter().build_file_dialog("Input", ["csv"], False)

        assert dialog.fileMode() == QFileDialog.ExistingFile
        assert dialog.windowTitle() == "Input"

    def test_file_dialog_for_directories(self, qapp):
        dialog = QtPresenter().build_file_dialog("Output", [], True)

        assert dialog.fileMode() == QFileDialog.Directory
        assert dialog.testOption(QFileDialog.ShowDirsOnly)
