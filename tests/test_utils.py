import os

import pytest

from core.config import CUSTOM_NAME_MAX_LEN, JobRequest
from core.errors import DirectoryError, ValidationError
from core.utils import ensure_directory, is_http_url, is_playlist_url, sanitize_filename, validate_request


def make_request(**overrides) -> JobRequest:
    fields = dict(mode="video", container="mp4", quality="Best",
                  url="https://example.com/watch?v=abc", directory="/tmp/out")
    fields.update(overrides)
    return JobRequest(**fields)


def test_sanitize_replaces_reserved_characters():
    assert sanitize_filename('a\\b/c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"


def test_sanitize_trims_and_caps_length():
    assert sanitize_filename("  hello  ") == "hello"
    assert len(sanitize_filename("x" * 250)) == CUSTOM_NAME_MAX_LEN


def test_sanitize_keeps_other_characters():
    assert sanitize_filename("Été - part 1 (final)") == "Été - part 1 (final)"


def test_playlist_detection():
    assert is_playlist_url("https://www.youtube.com/watch?v=a&list=PL1")
    assert is_playlist_url("https://www.youtube.com/playlist?list=PL1")
    assert not is_playlist_url("https://www.youtube.com/watch?v=a")


@pytest.mark.parametrize("url", ["ftp://example.com/a", "example.com/watch", "file:///etc/passwd", "", "HTTPS//x"])
def test_non_http_urls_rejected(url):
    assert not is_http_url(url)
    with pytest.raises(ValidationError):
        validate_request(make_request(url=url))


def test_empty_directory_rejected():
    with pytest.raises(ValidationError):
        validate_request(make_request(directory="   "))


def test_validation_trims_and_sanitizes():
    request = validate_request(make_request(url="  https://example.com/v  ", custom_name=" a:b "))
    assert request.url == "https://example.com/v"
    assert request.custom_name == "a_b"


def test_blank_custom_name_becomes_none():
    assert validate_request(make_request(custom_name="   ")).custom_name is None


def test_playlist_clears_custom_name():
    request = validate_request(make_request(url="https://example.com/playlist?list=PL1", custom_name="mine"))
    assert request.custom_name is None


def test_reserved_only_name_is_replaced_not_emptied():
    # Replacement keeps reserved-only names non-empty; blank names become None.
    assert validate_request(make_request(custom_name="???")).custom_name == "___"
    assert validate_request(make_request(custom_name="   ")).custom_name is None


@pytest.mark.parametrize("overrides", [
    dict(mode="podcast"),
    dict(container="mp3"),
    dict(quality="128k"),
    dict(mode="audio", container="mp3", quality="1080p"),
    dict(mode="audio", container="mkv", quality="Best"),
])
def test_options_outside_mode_tiers_rejected(overrides):
    with pytest.raises(ValidationError):
        validate_request(make_request(**overrides))


def test_ensure_directory_creates_nested(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_directory(str(target))
    assert os.path.isdir(target)


def test_ensure_directory_fails_on_file(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("x")
    with pytest.raises(DirectoryError):
        ensure_directory(str(blocker / "sub"))
