import os
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QComboBox,
    QMessageBox,
    QFileDialog,
)

from core.config import (
    AUDIO_QUALITIES,
    MODE_AUDIO,
    MODE_VIDEO,
    MODES,
    VIDEO_QUALITIES,
    ExternalToolPaths,
    JobRequest,
    formats_for,
)
from core.dependencies import check_dependencies
from core.errors import JobBusyError, JobError, ValidationError
from core.supervisor import JobState, JobSupervisor
from core.utils import is_http_url, is_playlist_url
from ui.components.console_view import ConsoleView
from ui.components.quality_selector import QualitySelector
from ui.components.title_bar import CustomTitleBar
from ui.styles import Theme, load_stylesheet


APP_TITLE = "yt-dlp helper"
APP_VERSION = "1.0.0"

HELP_TEXT = (
    "Usage:\n"
    "  mode: video or audio\n"
    "  URL: must start with http:// or https://\n\n"
    "This GUI is a helper wrapper around yt-dlp and ffmpeg.\n"
    "Make sure yt-dlp and ffmpeg are in the deps folder next to the application."
)


class MainWindow(QMainWindow):
    def __init__(self, tools: Optional[ExternalToolPaths] = None, supervisor: Optional[JobSupervisor] = None):
        super().__init__()
        self.setObjectName("MainWindow")
        self.setWindowFlags(Qt.FramelessWindowHint | Qt.Window)

        self._tools = tools or ExternalToolPaths.resolve()
        self._supervisor = supervisor or JobSupervisor(self._tools, parent=self)
        self._theme = Theme.DARK
        self._closing = False

        self._deps = check_dependencies(self._tools)

        self._init_ui()
        self._connect_supervisor()
        self._log_dependencies()

    def _init_ui(self) -> None:
        central = QWidget(self)
        central.setObjectName("Central")
        root = QVBoxLayout(central)
        root.setContentsMargins(10, 6, 10, 8)
        root.setSpacing(6)

        self.title_bar = CustomTitleBar(self, f"{APP_TITLE} (Qt)")
        self.title_bar.themeRequested.connect(self.apply_theme)
        root.addWidget(self.title_bar)

        mode_row = QHBoxLayout()
        mode_row.setSpacing(6)
        mode_row.addWidget(QLabel("Mode:", self), 0)
        self.mode_combo = QComboBox(self)
        self.mode_combo.setObjectName("cbMode")
        self.mode_combo.addItems(list(MODES))
        self.mode_combo.setToolTip("Video keeps picture and sound; audio extracts the soundtrack only.")
        mode_row.addWidget(self.mode_combo, 0)

        mode_row.addSpacing(12)
        mode_row.addWidget(QLabel("Format:", self), 0)
        self.format_combo = QComboBox(self)
        self.format_combo.setObjectName("cbFormat")
        self.format_combo.setToolTip("Output container for the selected mode.")
        mode_row.addWidget(self.format_combo, 0)
        mode_row.addStretch(1)
        root.addLayout(mode_row)

        self.video_quality_label = QLabel("Video Quality:", self)
        self.video_quality_label.setObjectName("SectionLabel")
        self.video_quality_label.setToolTip("Maximum video height. 'Best' picks the highest available.")
        root.addWidget(self.video_quality_label)
        self.video_quality = QualitySelector(VIDEO_QUALITIES, "video", self)
        root.addWidget(self.video_quality)

        self.audio_quality_label = QLabel("Audio Quality:", self)
        self.audio_quality_label.setObjectName("SectionLabel")
        self.audio_quality_label.setToolTip("Audio bitrate. 'Best' lets yt-dlp keep its default.")
        root.addWidget(self.audio_quality_label)
        self.audio_quality = QualitySelector(AUDIO_QUALITIES, "audio", self)
        root.addWidget(self.audio_quality)

        root.addWidget(QLabel("URL:", self))
        self.url_input = QLineEdit(self)
        self.url_input.setPlaceholderText("https://...")
        root.addWidget(self.url_input)

        dir_row = QHBoxLayout()
        dir_row.setSpacing(6)
        dir_row.addWidget(QLabel("Save to:", self), 0)
        self.dir_input = QLineEdit(self)
        self.dir_input.setPlaceholderText(os.path.join(os.path.expanduser("~"), "Videos"))
        dir_row.addWidget(self.dir_input, 1)
        self.browse_button = QPushButton("Choose...", self)
        self.browse_button.setToolTip("Choose download directory")
        self.browse_button.clicked.connect(self._choose_directory)
        dir_row.addWidget(self.browse_button, 0)
        root.addLayout(dir_row)

        root.addWidget(QLabel("Custom name (optional):", self))
        self.custom_input = QLineEdit(self)
        self.custom_input.setPlaceholderText("without extension and special characters")
        self.custom_input.setToolTip("Ignored for playlists; each entry keeps its own title.")
        root.addWidget(self.custom_input)

        actions_row = QHBoxLayout()
        actions_row.setSpacing(6)
        self.start_button = QPushButton("Download", self)
        self.start_button.setObjectName("DownloadButton")
        self.cancel_button = QPushButton("Cancel", self)
        self.cancel_button.setObjectName("CancelButton")
        self.cancel_button.setToolTip("Stop yt-dlp. Partial files may remain on disk.")
        self.cancel_button.setEnabled(False)
        self.help_button = QPushButton("Help", self)
        self.version_button = QPushButton("Version", self)
        actions_row.addWidget(self.start_button, 0)
        actions_row.addWidget(self.cancel_button, 0)
        actions_row.addWidget(self.help_button, 0)
        actions_row.addWidget(self.version_button, 0)
        actions_row.addStretch(1)
        root.addLayout(actions_row)

        root.addWidget(QLabel("Console output:", self))
        self.console = ConsoleView(self)
        root.addWidget(self.console, 1)

        self.setCentralWidget(central)

        self.start_button.clicked.connect(self._start_download)
        self.cancel_button.clicked.connect(self._cancel_download)
        self.help_button.clicked.connect(self._show_help)
        self.version_button.clicked.connect(self._show_version)
        self.mode_combo.currentTextChanged.connect(self._update_mode)

        self._update_mode(self.mode_combo.currentText())
        self.resize(960, 640)

    def _connect_supervisor(self) -> None:
        self._supervisor.output.connect(self.console.append_chunk)
        self._supervisor.log.connect(self.append_log)
        self._supervisor.stateChanged.connect(self._on_state_changed)
        self._supervisor.completed.connect(self._on_completed)
        self._supervisor.cancelled.connect(self._on_cancelled)

    def _log_dependencies(self) -> None:
        self.append_log(f"yt-dlp: {self._deps['yt_dlp']} ({self._tools.downloader})")
        self.append_log(f"ffmpeg: {self._deps['ffmpeg']} ({self._tools.transcoder})")

    # --------------- UI helpers ---------------
    def apply_theme(self, theme: Theme) -> None:
        self._theme = theme
        app = QApplication.instance()
        if app is not None:
            app.setStyleSheet(load_stylesheet(theme))
        self.title_bar.dark_btn.setChecked(theme is Theme.DARK)
        self.title_bar.light_btn.setChecked(theme is Theme.LIGHT)

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def supervisor(self) -> JobSupervisor:
        return self._supervisor

    def _update_mode(self, mode: str) -> None:
        is_audio = mode == MODE_AUDIO
        self.audio_quality_label.setVisible(is_audio)
        self.audio_quality.setVisible(is_audio)
        self.video_quality_label.setVisible(not is_audio)
        self.video_quality.setVisible(not is_audio)

        self.format_combo.clear()
        self.format_combo.addItems(list(formats_for(mode)))

    def _choose_directory(self) -> None:
        path = QFileDialog.getExistingDirectory(self, "Choose directory", self.dir_input.text())
        if path:
            self.dir_input.setText(os.path.normpath(path))

    def append_log(self, message: str) -> None:
        self.console.append_line(message)

    def _set_controls_enabled(self, enabled: bool) -> None:
        for widget in (
            self.mode_combo,
            self.format_combo,
            self.video_quality,
            self.audio_quality,
            self.url_input,
            self.dir_input,
            self.browse_button,
            self.custom_input,
            self.start_button,
        ):
            widget.setEnabled(enabled)

    def _show_message(self, kind: str, title: str, text: str) -> None:
        if kind == "critical":
            QMessageBox.critical(self, title, text)
        elif kind == "warning":
            QMessageBox.warning(self, title, text)
        else:
            QMessageBox.information(self, title, text)

    def _show_help(self) -> None:
        self._show_message("information", "Help", HELP_TEXT)

    def _show_version(self) -> None:
        self._show_message(
            "information",
            "Version",
            f"{APP_TITLE} v{APP_VERSION}\n\nyt-dlp: {self._deps['yt_dlp']}\nffmpeg: {self._deps['ffmpeg']}",
        )

    # --------------- Download lifecycle ---------------
    def collect_request(self) -> JobRequest:
        mode = self.mode_combo.currentText() or MODE_VIDEO
        selector = self.audio_quality if mode == MODE_AUDIO else self.video_quality
        return JobRequest(
            mode=mode,
            container=self.format_combo.currentText(),
            quality=selector.selected(),
            url=self.url_input.text(),
            directory=self.dir_input.text(),
            custom_name=self.custom_input.text() or None,
        )

    def _start_download(self) -> None:
        request = self.collect_request()
        self.console.clear()
        if is_http_url(request.url.strip()) and is_playlist_url(request.url):
            self.custom_input.clear()
        try:
            self._supervisor.start(request)
        except (ValidationError, JobBusyError) as e:
            self._show_message("warning", "Error", str(e))
        except JobError as e:
            self.append_log(f"Error: {e}")
            self._show_message("critical", "Error", str(e))

    def _cancel_download(self) -> None:
        if self._supervisor.cancel():
            self.cancel_button.setEnabled(False)

    def _on_state_changed(self, state: JobState) -> None:
        busy = state in (JobState.STARTING, JobState.RUNNING, JobState.CANCELLING)
        self._set_controls_enabled(not busy)
        self.cancel_button.setEnabled(state is JobState.RUNNING)

    def _on_completed(self, exit_code: int) -> None:
        # No completion dialogs while the window is going away.
        if self._closing:
            return
        if exit_code == 0:
            self._show_message("information", "Completed", "Download completed successfully.")
        else:
            self._show_message("warning", "Error", f"yt-dlp finished with exit code {exit_code}")

    def _on_cancelled(self) -> None:
        if self._closing:
            return
        self._show_message(
            "information",
            "Cancelled",
            "Download cancelled. Partial files may remain in the destination directory.",
        )

    # --------------- Window close / cleanup ---------------
    def closeEvent(self, event) -> None:
        self._closing = True
        self._supervisor.shutdown()
        super().closeEvent(event)
