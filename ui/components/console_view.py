from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit


class ConsoleView(QPlainTextEdit):
    """
    Read-only, append-only view of the downloader's raw output.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Console")
        self.setReadOnly(True)
        self.setMinimumHeight(200)
        self.setLineWrapMode(QPlainTextEdit.NoWrap)

    def append_chunk(self, text: str) -> None:
        # Chunks may end mid-line; the next one continues on the same line.
        self.moveCursor(QTextCursor.End)
        self.insertPlainText(text)
        self._scroll_to_end()

    def append_line(self, text: str) -> None:
        content = self.toPlainText()
        prefix = "\n" if content and not content.endswith("\n") else ""
        self.append_chunk(f"{prefix}{text}\n")

    def _scroll_to_end(self) -> None:
        bar = self.verticalScrollBar()
        bar.setValue(bar.maximum())
