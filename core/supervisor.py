import enum
import logging
import shlex
from typing import List, Optional

from PySide6.QtCore import QObject, QProcess, QTimer, Signal

from core.arguments import build_yt_dlp_args
from core.config import KILL_GRACE_MS, LAUNCH_TIMEOUT_MS, PROBE_TIMEOUT, ExternalToolPaths, JobRequest
from core.dependencies import probe_downloader, probe_transcoder
from core.errors import JobBusyError, JobError, LaunchError, ToolUnavailableError
from core.relay import OutputRelay
from core.utils import ensure_directory, is_playlist_url, validate_request

logger = logging.getLogger(__name__)


class JobState(enum.Enum):
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"


class JobSupervisor(QObject):
    """
    Owns the one yt-dlp process that may exist at a time.

    Callers interact through start()/cancel()/shutdown() and observe the job
    through signals. Validation problems raise before any state change; other
    start failures raise after the supervisor has gone back to IDLE.
    """
    stateChanged = Signal(object)
    output = Signal(str)
    log = Signal(str)
    started = Signal(list)
    completed = Signal(int)
    cancelled = Signal()

    def __init__(
        self,
        tools: ExternalToolPaths,
        probe_timeout: float = PROBE_TIMEOUT,
        launch_timeout_ms: int = LAUNCH_TIMEOUT_MS,
        kill_grace_ms: int = KILL_GRACE_MS,
        parent=None,
    ):
        super().__init__(parent)
        self._tools = tools
        self._probe_timeout = probe_timeout
        self._launch_timeout_ms = launch_timeout_ms
        self._state = JobState.IDLE
        self._process: Optional[QProcess] = None
        self._relay: Optional[OutputRelay] = None

        self._kill_timer = QTimer(self)
        self._kill_timer.setSingleShot(True)
        self._kill_timer.setInterval(kill_grace_ms)
        self._kill_timer.timeout.connect(self._force_kill)

    @property
    def tools(self) -> ExternalToolPaths:
        return self._tools

    @property
    def state(self) -> JobState:
        return self._state

    def is_idle(self) -> bool:
        return self._state is JobState.IDLE

    def has_process(self) -> bool:
        return self._process is not None

    def _set_state(self, state: JobState) -> None:
        if state is self._state:
            return
        logger.debug(f"Job state: {self._state.value} -> {state.value}")
        self._state = state
        self.stateChanged.emit(state)

    def _emit_log(self, msg: str) -> None:
        logger.info(msg)
        self.log.emit(msg)

    # --------------- Start ---------------
    def start(self, request: JobRequest) -> List[str]:
        """
        Validates the request, probes both tools and launches yt-dlp.
        Returns the full command line that was started.
        """
        if not self.is_idle():
            raise JobBusyError("A download is already in progress.")

        request = validate_request(request)

        self._set_state(JobState.STARTING)
        try:
            command = self._launch(request)
        except JobError as e:
            logger.warning(f"Job start failed: {e}")
            self._release()
            self._set_state(JobState.IDLE)
            raise
        except Exception:
            logger.exception("Unexpected error while starting job")
            self._release()
            self._set_state(JobState.IDLE)
            raise

        self._set_state(JobState.RUNNING)
        self.started.emit(command)
        return command

    def _launch(self, request: JobRequest) -> List[str]:
        if is_playlist_url(request.url):
            self._emit_log("Warning: playlist detected, using yt-dlp's auto name.")

        ensure_directory(request.directory)

        self._emit_log("Checking dependencies: yt-dlp and ffmpeg...")
        result = probe_downloader(self._tools, self._probe_timeout)
        if not result.ok:
            raise ToolUnavailableError("yt-dlp", f"{result.status.value}: {self._tools.downloader}")
        result = probe_transcoder(self._tools, self._probe_timeout)
        if not result.ok:
            raise ToolUnavailableError("ffmpeg", f"{result.status.value}: {self._tools.transcoder}")

        args, outtmpl = build_yt_dlp_args(request, self._tools)
        command = [self._tools.downloader] + args
        self._emit_log(f"Output template: {outtmpl}")
        self._emit_log("Running command: " + shlex.join(command))

        self._process = QProcess(self)
        self._relay = OutputRelay(self._process, parent=self)
        self._relay.text.connect(self.output)
        self._process.finished.connect(self._on_finished)
        self._process.errorOccurred.connect(self._on_process_error)

        self._process.start(self._tools.downloader, args)
        if not self._process.waitForStarted(self._launch_timeout_ms):
            raise LaunchError(f"Failed to execute yt-dlp: {self._process.errorString()}")
        return command

    # --------------- Cancel ---------------
    def cancel(self) -> bool:
        """
        Asks the running process to terminate, killing it after the grace period.
        Returns False when there is nothing to cancel.
        """
        if self._state is not JobState.RUNNING or self._process is None:
            return False
        self._set_state(JobState.CANCELLING)
        self._emit_log("Cancellation requested, stopping yt-dlp...")
        self._process.terminate()
        self._kill_timer.start()
        return True

    def _force_kill(self) -> None:
        if self._state is JobState.CANCELLING and self._process is not None:
            if self._process.state() != QProcess.NotRunning:
                self._emit_log("yt-dlp did not exit in time, killing it.")
                self._process.kill()

    def shutdown(self, timeout_ms: int = 5000) -> None:
        """Cancels any active job and blocks until its process is gone."""
        if self._process is None:
            return
        self.cancel()
        if not self._process.waitForFinished(timeout_ms) and self._process is not None:
            self._process.kill()
            self._process.waitForFinished(1000)

    # --------------- Completion ---------------
    def _on_process_error(self, error) -> None:
        if self._process is not None:
            logger.debug(f"QProcess error {error}: {self._process.errorString()}")

    def _on_finished(self, exit_code: int, exit_status) -> None:
        if self._relay is not None:
            self._relay.flush()
        self._kill_timer.stop()

        if exit_status == QProcess.CrashExit and self._state is not JobState.CANCELLING:
            logger.warning(f"yt-dlp crashed (exit code {exit_code})")

        if self._state is JobState.CANCELLING:
            self._release()
            self._set_state(JobState.CANCELLED)
            self._set_state(JobState.IDLE)
            self._emit_log("Download cancelled. Partial files may remain in the destination directory.")
            self.cancelled.emit()
        else:
            self._release()
            self._set_state(JobState.COMPLETED)
            self._set_state(JobState.IDLE)
            if exit_code == 0:
                self._emit_log("Command executed successfully.")
            else:
                self._emit_log(f"yt-dlp exited with code {exit_code}")
            self.completed.emit(exit_code)

    def _release(self) -> None:
        self._kill_timer.stop()
        process, relay = self._process, self._relay
        self._process = None
        self._relay = None
        if process is not None:
            process.finished.disconnect(self._on_finished)
            if process.state() != QProcess.NotRunning:
                process.kill()
                process.waitForFinished(1000)
            process.deleteLater()
        if relay is not None:
            relay.deleteLater()
