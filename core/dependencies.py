import enum
import logging
import subprocess
import sys
from dataclasses import dataclass
from typing import Dict

from core.config import PROBE_TIMEOUT, ExternalToolPaths

logger = logging.getLogger(__name__)

YT_DLP_VERSION_FLAG = "--version"
FFMPEG_VERSION_FLAG = "-version"


class ProbeStatus(enum.Enum):
    OK = "ok"
    NOT_FOUND = "not found"
    TIMED_OUT = "timed out"


@dataclass
class ProbeResult:
    status: ProbeStatus
    version: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.OK


def probe(path: str, version_flag: str, timeout: float = PROBE_TIMEOUT) -> ProbeResult:
    """
    Runs `path version_flag` and waits at most `timeout` seconds.
    A missing executable or a non-zero exit counts as NOT_FOUND.
    """
    kwargs = {}
    if sys.platform == "win32":
        kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW

    try:
        proc = subprocess.run(
            [path, version_flag],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Probe timed out after {timeout}s: {path}")
        return ProbeResult(ProbeStatus.TIMED_OUT)
    except OSError as e:
        logger.debug(f"Probe could not launch {path}: {e}")
        return ProbeResult(ProbeStatus.NOT_FOUND)

    if proc.returncode != 0:
        logger.debug(f"Probe of {path} exited with code {proc.returncode}")
        return ProbeResult(ProbeStatus.NOT_FOUND)

    out = proc.stdout.decode(errors="replace").strip()
    return ProbeResult(ProbeStatus.OK, out.splitlines()[0] if out else "")


def probe_downloader(tools: ExternalToolPaths, timeout: float = PROBE_TIMEOUT) -> ProbeResult:
    return probe(tools.downloader, YT_DLP_VERSION_FLAG, timeout)


def probe_transcoder(tools: ExternalToolPaths, timeout: float = PROBE_TIMEOUT) -> ProbeResult:
    return probe(tools.transcoder, FFMPEG_VERSION_FLAG, timeout)


def check_dependencies(tools: ExternalToolPaths) -> Dict[str, str]:
    """
    Reports the version line of yt-dlp and ffmpeg, or why they are unusable.
    """
    deps = {}
    for name, result in (("yt_dlp", probe_downloader(tools)), ("ffmpeg", probe_transcoder(tools))):
        if result.ok:
            deps[name] = result.version or "unknown version"
        else:
            deps[name] = result.status.value.capitalize()
    return deps
