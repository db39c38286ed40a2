import argparse
import ctypes
import signal
import sys

from core.config import (
    BEST,
    MODE_VIDEO,
    MODES,
    AUDIO_FORMATS,
    VIDEO_FORMATS,
    ExternalToolPaths,
    JobRequest,
    formats_for,
    qualities_for,
)
from core.errors import JobError
from core.logger import setup_logging


EXIT_INTERRUPTED = 130


def hide_console_window():
    """
    Hides the console window if it exists.
    Used when running in GUI mode from a console-subsystem executable.
    """
    try:
        hwnd = ctypes.windll.kernel32.GetConsoleWindow()
        if hwnd != 0:
            ctypes.windll.user32.ShowWindow(hwnd, 0) # 0 = SW_HIDE
    except (AttributeError, OSError):
        pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="yt-dlp helper: download media with yt-dlp and ffmpeg")
    parser.add_argument("-i", "--input", required=True, help="Source URL (http:// or https://)")
    parser.add_argument("-od", "--output-dir", required=True, help="Destination directory (created if missing)")
    parser.add_argument("-m", "--mode", choices=list(MODES), default=MODE_VIDEO, help="Download mode (default: video)")
    parser.add_argument("-f", "--format", choices=list(VIDEO_FORMATS + AUDIO_FORMATS),
                        help="Container: mp4/mkv for video, mp3/opus for audio")
    parser.add_argument("-q", "--quality", default=BEST, help="Quality tier (e.g. 720p, 4K, 192k, Best)")
    parser.add_argument("-n", "--name", help="Custom file name without extension (ignored for playlists)")
    parser.add_argument("--deps-dir", help="Folder holding the yt-dlp and ffmpeg executables")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


def request_from_args(parser: argparse.ArgumentParser, args) -> JobRequest:
    container = args.format or formats_for(args.mode)[0]
    if container not in formats_for(args.mode):
        parser.error(f"format {container!r} is not available in {args.mode} mode")
    if args.quality not in qualities_for(args.mode):
        parser.error(f"quality {args.quality!r} is not available in {args.mode} mode "
                     f"(choose from {', '.join(qualities_for(args.mode))})")
    return JobRequest(
        mode=args.mode,
        container=container,
        quality=args.quality,
        url=args.input,
        directory=args.output_dir,
        custom_name=args.name,
    )


def run_cli(argv) -> int:
    from PySide6.QtCore import QCoreApplication, QTimer
    from core.supervisor import JobSupervisor

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)
    request = request_from_args(parser, args)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    tools = ExternalToolPaths.resolve(args.deps_dir)
    supervisor = JobSupervisor(tools)

    def on_output(text: str):
        sys.stdout.write(text)
        sys.stdout.flush()

    supervisor.output.connect(on_output)
    supervisor.completed.connect(app.exit)
    supervisor.cancelled.connect(lambda: app.exit(EXIT_INTERRUPTED))

    try:
        supervisor.start(request)
    except JobError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    def on_sigint(signum, frame):
        print("\nCancelled by user.", file=sys.stderr)
        if not supervisor.cancel():
            app.exit(EXIT_INTERRUPTED)

    previous = signal.signal(signal.SIGINT, on_sigint)
    # Wake the interpreter periodically so Python signal handlers get to run.
    ticker = QTimer()
    ticker.start(200)
    ticker.timeout.connect(lambda: None)
    try:
        return app.exec()
    finally:
        ticker.stop()
        signal.signal(signal.SIGINT, previous)
        supervisor.shutdown()
        supervisor.deleteLater()


def run_gui() -> int:
    if sys.platform == "win32":
        hide_console_window()

    from PySide6.QtWidgets import QApplication
    from ui.styles import Theme, load_stylesheet
    from ui.main_window import MainWindow

    setup_logging(verbose=False)
    app = QApplication(sys.argv)
    app.setStyleSheet(load_stylesheet(Theme.DARK))
    win = MainWindow(ExternalToolPaths.resolve())
    win.show()
    return app.exec()


def main() -> None:
    # No arguments: GUI. Anything else: CLI.
    if len(sys.argv) == 1:
        sys.exit(run_gui())
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
