import os
import sys
from dataclasses import dataclass
from typing import Optional

MODE_VIDEO = "video"
MODE_AUDIO = "audio"
MODES = (MODE_VIDEO, MODE_AUDIO)

BEST = "Best"

# Ordered low to high; the last entry is the default selection.
VIDEO_QUALITIES = ("240p", "360p", "480p", "720p", "1080p", "4K", BEST)
AUDIO_QUALITIES = ("128k", "192k", "256k", "320k", BEST)

VIDEO_FORMATS = ("mp4", "mkv")
AUDIO_FORMATS = ("mp3", "opus")

# Height ceiling used for "Best" and the top video tier.
MAX_HEIGHT = 4320

PROBE_TIMEOUT = 3.0
LAUNCH_TIMEOUT_MS = 3000
KILL_GRACE_MS = 3000

CUSTOM_NAME_MAX_LEN = 100

DEPS_DIR_NAME = "deps"


def qualities_for(mode: str):
    return AUDIO_QUALITIES if mode == MODE_AUDIO else VIDEO_QUALITIES


def formats_for(mode: str):
    return AUDIO_FORMATS if mode == MODE_AUDIO else VIDEO_FORMATS


@dataclass
class JobRequest:
    mode: str
    container: str
    quality: str
    url: str
    directory: str
    custom_name: Optional[str] = None

    @property
    def is_audio(self) -> bool:
        return self.mode == MODE_AUDIO


def get_app_dir() -> str:
    """
    Directory the application runs from.
    The executable's folder when frozen by PyInstaller, the project root otherwise.
    """
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def executable_name(name: str) -> str:
    return f"{name}.exe" if sys.platform == "win32" else name


@dataclass(frozen=True)
class ExternalToolPaths:
    downloader: str
    transcoder: str

    @classmethod
    def resolve(cls, deps_dir: Optional[str] = None) -> "ExternalToolPaths":
        deps_dir = deps_dir or os.path.join(get_app_dir(), DEPS_DIR_NAME)
        return cls(
            downloader=os.path.join(deps_dir, executable_name("yt-dlp")),
            transcoder=os.path.join(deps_dir, executable_name("ffmpeg")),
        )
