from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QToolButton, QButtonGroup

from ui.styles import Theme


class CustomTitleBar(QWidget):
    themeRequested = Signal(object)

    def __init__(self, parent, title: str):
        super().__init__(parent)
        self.setObjectName("TitleBar")
        self.setFixedHeight(32)

        self._window = parent
        self._start_pos = None
        self._is_dragging = False

        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 0, 5, 0)
        layout.setSpacing(5)

        self.title_label = QLabel(title, self)
        layout.addWidget(self.title_label)

        layout.addStretch(1)

        self.dark_btn = QToolButton(self)
        self.dark_btn.setObjectName("DarkModeButton")
        self.dark_btn.setText("Dark")
        self.dark_btn.setCheckable(True)
        self.dark_btn.setToolTip("Dark theme")
        layout.addWidget(self.dark_btn)

        self.light_btn = QToolButton(self)
        self.light_btn.setObjectName("LightModeButton")
        self.light_btn.setText("Light")
        self.light_btn.setCheckable(True)
        self.light_btn.setToolTip("Light theme")
        layout.addWidget(self.light_btn)

        self.theme_group = QButtonGroup(self)
        self.theme_group.setExclusive(True)
        self.theme_group.addButton(self.dark_btn)
        self.theme_group.addButton(self.light_btn)
        self.dark_btn.setChecked(True)

        self.dark_btn.clicked.connect(lambda: self.themeRequested.emit(Theme.DARK))
        self.light_btn.clicked.connect(lambda: self.themeRequested.emit(Theme.LIGHT))

        self.min_btn = QToolButton(self)
        self.min_btn.setObjectName("MinimizeButton")
        self.min_btn.setText("_")
        self.min_btn.setToolTip("Minimize")
        self.min_btn.clicked.connect(self._window.showMinimized)
        layout.addWidget(self.min_btn)

        self.close_btn = QToolButton(self)
        self.close_btn.setObjectName("CloseButton")
        self.close_btn.setText("X")
        self.close_btn.setToolTip("Close")
        self.close_btn.clicked.connect(self._window.close)
        layout.addWidget(self.close_btn)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._start_pos = event.globalPosition().toPoint()
            self._is_dragging = True

    def mouseMoveEvent(self, event):
        if self._is_dragging and self._start_pos:
            current_pos = event.globalPosition().toPoint()
            delta = current_pos - self._start_pos
            self._window.move(self._window.pos() + delta)
            self._start_pos = current_pos

    def mouseReleaseEvent(self, event):
        self._is_dragging = False
