import logging
import sys
from pathlib import Path


def _default_log_path() -> Path:
    app_dir = Path.home() / ".ytdlp-helper"
    app_dir.mkdir(exist_ok=True)
    return app_dir / "helper.log"


def setup_logging(verbose: bool = False, log_file: str = None):
    """
    Sets up logging configuration.
    """
    level = logging.DEBUG if verbose else logging.INFO

    handlers = []

    # File handler
    try:
        file_handler = logging.FileHandler(log_file or _default_log_path(), encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        handlers.append(file_handler)
    except OSError:
        pass

    # Console handler; stderr so CLI mode keeps stdout for tool output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    handlers.append(console_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True
    )
