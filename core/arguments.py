from typing import List, Tuple

from core.config import BEST, MAX_HEIGHT, ExternalToolPaths, JobRequest
from core.utils import is_playlist_url

TOP_VIDEO_TIER = "4K"


def build_output_template(request: JobRequest) -> str:
    directory = request.directory
    if request.custom_name:
        return f"{directory}/{request.custom_name}.%(ext)s"
    if is_playlist_url(request.url):
        return f"{directory}/%(playlist)s/%(playlist_index)03d - %(title)s.%(ext)s"
    return f"{directory}/%(title)s.%(ext)s"


def height_ceiling(quality: str) -> int:
    if quality in (BEST, TOP_VIDEO_TIER):
        return MAX_HEIGHT
    return int(quality.rstrip("pP"))


def build_yt_dlp_args(request: JobRequest, tools: ExternalToolPaths) -> Tuple[List[str], str]:
    """
    Builds the yt-dlp argument list for a validated request.
    Returns the arguments (without the executable) and the output template.
    """
    outtmpl = build_output_template(request)

    args: List[str] = ["--ffmpeg-location", tools.transcoder]

    if request.is_audio:
        args += ["-x", "--audio-format", request.container]
        if request.quality != BEST:
            args += ["--audio-quality", request.quality]
    else:
        h = height_ceiling(request.quality)
        args += [
            "-f", f"bestvideo[height<={h}]+bestaudio/best",
            "--merge-output-format", request.container,
        ]

    args += [request.url, "-o", outtmpl]
    return args, outtmpl
