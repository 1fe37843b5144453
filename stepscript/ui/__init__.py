"""
Presentation Layer

Qt dialogs and the presenters that show them on behalf of input steps.
"""

from .presenter import HeadlessPresenter, QtPresenter, name_filter
from .text_input_dialog import TextInputDialog

__all__ = [
    "HeadlessPresenter",
    "QtPresenter",
    "TextInputDialog",
    "name_filter",
]
