import dataclasses
import os
import re
from typing import Optional

from core.config import CUSTOM_NAME_MAX_LEN, MODES, JobRequest, formats_for, qualities_for
from core.errors import DirectoryError, ValidationError

_RESERVED_CHARS = re.compile(r'[\\/:*?"<>|]')


def sanitize_filename(name: Optional[str]) -> str:
    """
    Replaces characters that are reserved on common filesystems with '_',
    trims surrounding whitespace and caps the result length.
    """
    cleaned = _RESERVED_CHARS.sub("_", name or "").strip()
    return cleaned[:CUSTOM_NAME_MAX_LEN]


def is_playlist_url(url: str) -> bool:
    return "list=" in url or "playlist?" in url


def is_http_url(url: str) -> bool:
    return url.startswith("http://") or url.startswith("https://")


def validate_request(request: JobRequest) -> JobRequest:
    """
    Checks user input and returns a normalized copy of the request.

    Playlist URLs drop any custom name so the downloader names each entry.
    Raises ValidationError on bad input.
    """
    url = (request.url or "").strip()
    directory = (request.directory or "").strip()
    custom = (request.custom_name or "").strip()

    if not url or not is_http_url(url):
        raise ValidationError("Invalid URL. Must start with http:// or https://")
    if not directory:
        raise ValidationError("Choose a destination directory.")
    if request.mode not in MODES:
        raise ValidationError(f"Unknown mode: {request.mode}")
    if request.container not in formats_for(request.mode):
        raise ValidationError(f"Format {request.container} is not available in {request.mode} mode.")
    if request.quality not in qualities_for(request.mode):
        raise ValidationError(f"Quality {request.quality} is not available in {request.mode} mode.")

    if is_playlist_url(url):
        custom = ""

    if custom:
        custom = sanitize_filename(custom)
        if not custom:
            raise ValidationError("Custom name is empty after sanitization.")

    return dataclasses.replace(
        request,
        url=url,
        directory=directory,
        custom_name=custom or None,
    )


def ensure_directory(directory: str) -> None:
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise DirectoryError(f"Failed to create the directory: {directory}\n{e}") from e
