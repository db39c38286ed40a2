import codecs
import locale

from PySide6.QtCore import QObject, QProcess, Signal


def local_encoding() -> str:
    return locale.getpreferredencoding(False) or "utf-8"


class OutputRelay(QObject):
    """
    Forwards whatever a QProcess writes to stdout/stderr as decoded text.

    Every ready-read event drains all available bytes of that stream. Each
    stream keeps its own incremental decoder so a multi-byte character split
    between two reads comes out whole. Lines are not buffered.
    """
    text = Signal(str)

    def __init__(self, process: QProcess, encoding: str = None, parent=None):
        super().__init__(parent)
        self._process = process
        decoder_cls = codecs.getincrementaldecoder(encoding or local_encoding())
        self._stdout_decoder = decoder_cls(errors="replace")
        self._stderr_decoder = decoder_cls(errors="replace")

        process.readyReadStandardOutput.connect(self._read_stdout)
        process.readyReadStandardError.connect(self._read_stderr)

    def _forward(self, decoder, data: bytes, final: bool = False) -> None:
        chunk = decoder.decode(data, final)
        if chunk:
            self.text.emit(chunk)

    def _read_stdout(self) -> None:
        self._forward(self._stdout_decoder, bytes(self._process.readAllStandardOutput().data()))

    def _read_stderr(self) -> None:
        self._forward(self._stderr_decoder, bytes(self._process.readAllStandardError().data()))

    def flush(self) -> None:
        """Drains leftovers and emits any bytes the decoders were holding back."""
        self._read_stdout()
        self._read_stderr()
        self._forward(self._stdout_decoder, b"", final=True)
        self._forward(self._stderr_decoder, b"", final=True)
        self._stdout_decoder.reset()
        self._stderr_decoder.reset()
