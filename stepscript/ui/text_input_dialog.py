"""
TextInputDialog - Single-line text prompt shown by PromptStep.
"""

from typing import Optional

from PyQt5.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
)


class TextInputDialog(QDialog):
    """
    Dialog with a label, one text field and OK/Cancel buttons.

    The same dialog is reused every time its prompt is shown again, so the
    field is re-seeded with the initial value before each exec_().

    Example:
        dialog = TextInputDialog("Project name")
        dialog.set_text("untitled")
        if dialog.exec_() == QDialog.Accepted:
            name = dialog.text()
    """

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)

        layout = QFormLayout()

        self.label = QLabel(title)
        layout.addRow(self.label)

        self.input_field = QLineEdit()
        layout.addRow(self.input_field)

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.Ok | QDialogButtonBox.Cancel
        )
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)
        layout.addRow(self.button_box)

        self.setLayout(layout)
        self.setMinimumWidth(400)

    def set_text(self, value: str) -> None:
        """Seed the field and select it so typing replaces it."""
        self.input_field.setText(value)
        self.input_field.selectAll()

    def text(self) -> str:
        """Get the entered text."""
        return self.input_field.text()

    def prompt(self, initial_value: str) -> Optional[str]:
        """Show the dialog modally; returns the text or None if cancelled."""
        self.set_text(initial_value)
        if self.exec_() == QDialog.Accepted:
            return self.text()
        return None
