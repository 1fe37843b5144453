"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import pytest

# Dialogs are never shown on screen during tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    from PyQt5.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def recorder():
    """Collects the ids of steps as their actions run."""
    return []


@pytest.fixture
def record_action(recorder):
    """Build a BlockStep action that appends a label to the recorder."""
    def factory(label, result=None):
        def action(context):
            recorder.append(label)
            return result
        return action
    return factory


@pytest.fixture
def temp_config_file(tmp_path):
    """Path to a config file inside a temporary directory."""
    return str(tmp_path / "config.json")
