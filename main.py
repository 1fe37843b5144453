# main.py
import os
import sys

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from stepscript.logging import configure_logging, logger
from stepscript.services.config_service import ConfigService
from stepscript.threads.sequencer_thread import SequencerThread
from stepscript.ui.presenter import QtPresenter
from stepscript.workflow import (
    BlockStep,
    ConditionalStep,
    PathSelectionStep,
    PromptStep,
    SequenceBuilder,
    Sequencer,
    StepOutcome,
)


def summarize_project(context):
    """Worker-thread step: describe what was collected so far."""
    name = context.get("project_name")
    return f"Project '{name}' ({len(name)} characters)"


def build_project_sequence(presenter: QtPresenter, config) -> Sequencer:
    """Name a project, optionally summarize it, then pick an output folder."""
    has_name = ConditionalStep(
        "has_name",
        lambda context: bool(context.get("project_name")),
        name="Check project name",
    )
    summarize = BlockStep("summarize", summarize_project, name="Summarize project")
    has_name.add_predicated_step(summarize)

    def confirm(context):
        summary = context.get_step_result("summarize") or "Unnamed project"
        folder = context.get("output_dir")
        reply = QMessageBox.question(
            None,
            "Confirm",
            f"{summary}\nOutput folder: {folder}\n\nContinue?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.Yes,
        )
        if reply != QMessageBox.Yes:
            return StepOutcome.cancel()
        return None

    return (
        SequenceBuilder()
        .then(PromptStep("ask_name", "Project name", output_key="project_name"))
        .then(has_name)
        .then(PathSelectionStep(
            "choose_output",
            "Output folder",
            output_key="output_dir",
            allow_directories=True,
            error_if_cancelled=True,
        ))
        .then(BlockStep("confirm", confirm, name="Confirm", run_on_main_thread=True))
        .register(summarize)
        .build(presenter=presenter, config=config)
    )


class SequencerWindow(QMainWindow):
    """Minimal window that starts the example sequence and shows its progress."""

    def __init__(self, config):
        super().__init__()
        self.config = config
        self.presenter = QtPresenter(parent_widget=self)
        self.worker = None
        self._close_pending = False

        self.setWindowTitle("stepscript")

        central = QWidget()
        layout = QVBoxLayout()

        self.status_label = QLabel("Idle")
        self.status_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.status_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        layout.addWidget(self.progress_bar)

        self.run_button = QPushButton("Run")
        self.run_button.clicked.connect(self.start_sequence)
        layout.addWidget(self.run_button)

        central.setLayout(layout)
        self.setCentralWidget(central)
        self.resize(400, 150)

    def start_sequence(self):
        sequencer = build_project_sequence(self.presenter, self.config)
        self.worker = SequencerThread(sequencer, parent=self)
        self.worker.progress_signal.connect(self.on_progress)
        self.worker.sequence_finished_signal.connect(self.on_finished)
        self.worker.finished.connect(self.on_thread_done)
        self.run_button.setEnabled(False)
        self.worker.start()

    def on_progress(self, message: str, percent: float):
        self.status_label.setText(message)
        if percent < 0:
            self.progress_bar.setRange(0, 0)
        else:
            self.progress_bar.setRange(0, 100)
            self.progress_bar.setValue(int(percent))

    def on_finished(self, state: str, error: str):
        self.progress_bar.setRange(0, 100)
        self.status_label.setText(f"{state.capitalize()}: {error}" if error else state.capitalize())
        self.run_button.setEnabled(True)

    def on_thread_done(self):
        if self._close_pending:
            self.close()

    def closeEvent(self, event):
        # Waiting here could block a step that is handing work to this thread
        if self.worker is not None and self.worker.isRunning():
            self.worker.cancel()
            self._close_pending = True
            self.status_label.setText("Closing after the current step...")
            event.ignore()
            return
        super().closeEvent(event)


def main():
    config_service = ConfigService(os.environ.get("STEPSCRIPT_CONFIG", "config.json"))
    config = config_service.load()

    configure_logging(config)
    logger.info("Starting stepscript example")

    app = QApplication(sys.argv)
    window = SequencerWindow(config)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
