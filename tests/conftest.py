"""Pytest configuration shared by the test modules.

Puts the project root on ``sys.path`` so ``import core`` works from any
location, runs Qt offscreen, and provides fake yt-dlp/ffmpeg executables.
"""

import os
import stat
import sys
import textwrap
import time

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from PySide6.QtTest import QTest  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from core.config import ExternalToolPaths  # noqa: E402

FAKE_YT_DLP = """
import json
import os
import signal
import sys
import time

args = sys.argv[1:]
if args == ["--version"]:
    print("2025.01.01")
    sys.exit(0)

with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "last_args.json"), "w") as f:
    json.dump(args, f)

url = args[-3]
if "stubborn" in url:
    signal.signal(signal.SIGTERM, signal.SIG_IGN)
if "slow" in url or "stubborn" in url:
    print("started", flush=True)
    time.sleep(30)
    sys.exit(0)

sys.stdout.write("[download] part")
sys.stdout.flush()
time.sleep(0.1)
sys.stdout.write("ial line\\n")
sys.stdout.flush()
time.sleep(0.1)
sys.stderr.write("WARNING: something on stderr\\n")
sys.stderr.flush()

if "exit=" in url:
    sys.exit(int(url.split("exit=")[1]))
sys.exit(0)
"""

FAKE_FFMPEG = """
import sys

if sys.argv[1:] == ["-version"]:
    print("ffmpeg version 6.0-fake Copyright (c) 2000-2023")
    sys.exit(0)
sys.exit(1)
"""

HANGING_TOOL = """
import time

time.sleep(30)
"""

FAILING_TOOL = """
import sys

sys.exit(2)
"""


def write_script(path, body: str) -> str:
    path.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def deps_dir(tmp_path):
    if sys.platform == "win32":
        pytest.skip("fake executables rely on shebang scripts")
    deps = tmp_path / "deps"
    deps.mkdir()
    write_script(deps / "yt-dlp", FAKE_YT_DLP)
    write_script(deps / "ffmpeg", FAKE_FFMPEG)
    return deps


@pytest.fixture
def fake_tools(deps_dir) -> ExternalToolPaths:
    return ExternalToolPaths(
        downloader=str(deps_dir / "yt-dlp"),
        transcoder=str(deps_dir / "ffmpeg"),
    )


@pytest.fixture
def missing_tools(tmp_path) -> ExternalToolPaths:
    return ExternalToolPaths.resolve(str(tmp_path / "nowhere"))


@pytest.fixture
def wait_until(qapp):
    def _wait(predicate, timeout: float = 10.0):
        deadline = time.monotonic() + timeout
        while not predicate():
            if time.monotonic() > deadline:
                raise AssertionError("condition not met before timeout")
            QTest.qWait(20)

    return _wait
