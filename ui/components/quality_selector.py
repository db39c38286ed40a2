from typing import Sequence

from PySide6.QtWidgets import QButtonGroup, QHBoxLayout, QPushButton, QWidget


class QualitySelector(QWidget):
    """Row of exclusive, checkable tier buttons. The last tier starts selected."""

    def __init__(self, qualities: Sequence[str], kind: str, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self.group = QButtonGroup(self)
        self.group.setExclusive(True)
        for q in qualities:
            btn = QPushButton(q, self)
            btn.setCheckable(True)
            btn.setProperty("qualityToggle", kind)
            self.group.addButton(btn)
            layout.addWidget(btn, 0)
        layout.addStretch(1)

        self.group.buttons()[-1].setChecked(True)

    def selected(self) -> str:
        return self.group.checkedButton().text()

    def select(self, quality: str) -> None:
        for btn in self.group.buttons():
            if btn.text() == quality:
                btn.setChecked(True)
                return
        raise ValueError(f"Unknown quality: {quality}")
