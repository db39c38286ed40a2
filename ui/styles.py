import enum
import re
from typing import Dict


class Theme(enum.Enum):
    DARK = "dark"
    LIGHT = "light"


DARK_COLORS: Dict[str, str] = {
    "window_bg": "#121212",
    "surface": "#1e1e1e",
    "button": "#1f1f1f",
    "button_hover": "#2a2a2a",
    "button_pressed": "#343434",
    "border": "#2a2a2a",
    "text": "#ffffff",
    "muted_text": "#aaaaaa",
    "accent": "#0a84ff",
    "accent_hover": "#1677ff",
    "audio_accent": "#2e8b57",
    "danger": "#c42b1c",
    "console_bg": "#0d0d0d",
}

LIGHT_COLORS: Dict[str, str] = {
    "window_bg": "#f3f3f3",
    "surface": "#ffffff",
    "button": "#fbfbfb",
    "button_hover": "#ececec",
    "button_pressed": "#e0e0e0",
    "border": "#d0d0d0",
    "text": "#1b1b1b",
    "muted_text": "#5c5c5c",
    "accent": "#0078d7",
    "accent_hover": "#106ebe",
    "audio_accent": "#2e8b57",
    "danger": "#c42b1c",
    "console_bg": "#fafafa",
}

PALETTES = {
    Theme.DARK: DARK_COLORS,
    Theme.LIGHT: LIGHT_COLORS,
}

STYLE_TEMPLATE = """
QMainWindow#MainWindow {
    background-color: @window_bg;
    border: 1px solid @border;
    border-radius: 10px;
    color: @text;
    font-family: "Inter", "Segoe UI", Arial, sans-serif;
    font-size: 9pt;
}
QWidget#Central { background-color: @window_bg; }

/* Labels */
QLabel { color: @text; }
QLabel#SectionLabel { color: @muted_text; font-weight: 600; }

/* Custom Title Bar */
#TitleBar {
    background-color: @surface;
    border-top-left-radius: 10px;
    border-top-right-radius: 10px;
}
#TitleBar QLabel { color: @text; font-weight: 600; }

/* Title bar buttons */
QToolButton#MinimizeButton, QToolButton#CloseButton,
QToolButton#DarkModeButton, QToolButton#LightModeButton {
    background-color: transparent;
    border: none;
    padding: 3px 6px;
    border-radius: 4px;
    color: @text;
    min-height: 18px;
}
QToolButton#MinimizeButton:hover, QToolButton#DarkModeButton:hover,
QToolButton#LightModeButton:hover { background-color: @button_hover; }
QToolButton#DarkModeButton:checked, QToolButton#LightModeButton:checked { background-color: @button_pressed; }
QToolButton#CloseButton:hover { background-color: @danger; }

/* Inputs (compact) */
QLineEdit, QComboBox {
    background-color: @surface;
    border: 1px solid @border;
    border-radius: 6px;
    padding: 4px 6px;
    color: @text;
    min-height: 26px;
}
QLineEdit:focus, QComboBox:focus { border: 1px solid @accent; }
QComboBox { padding-right: 24px; }
QComboBox QAbstractItemView {
    background-color: @surface;
    color: @text;
    border: 1px solid @border;
    selection-background-color: @accent_hover;
    selection-color: #ffffff;
}

/* Console */
QPlainTextEdit#Console {
    background-color: @console_bg;
    border: 1px solid @border;
    border-radius: 6px;
    padding: 6px 8px;
    color: @text;
    font-family: "Consolas", "DejaVu Sans Mono", monospace;
}

/* Buttons (compact, fluent-like) */
QPushButton {
    background-color: @button;
    border: 1px solid @border;
    border-radius: 6px;
    padding: 5px 10px;
    color: @text;
    min-height: 26px;
}
QPushButton:hover { background-color: @button_hover; }
QPushButton:pressed { background-color: @button_pressed; }
QPushButton:disabled { color: @muted_text; }

/* Quality toggles */
QPushButton[qualityToggle="video"]:checked {
    background-color: @accent;
    border: 1px solid @accent_hover;
    color: #ffffff;
    font-weight: bold;
}
QPushButton[qualityToggle="audio"]:checked {
    background-color: @audio_accent;
    border: 1px solid @audio_accent;
    color: #ffffff;
    font-weight: bold;
}

/* Primary/secondary */
QPushButton#DownloadButton {
    background-color: @accent;
    border: 1px solid @accent_hover;
    color: #ffffff;
    font-weight: bold;
    min-height: 28px;
    padding: 8px 12px;
}
QPushButton#DownloadButton:hover { background-color: @accent_hover; }
QPushButton#DownloadButton:disabled { background-color: @button_pressed; color: @muted_text; }
QPushButton#CancelButton {
    background-color: @button_pressed;
    border: 1px solid @border;
    min-height: 28px;
    padding: 8px 12px;
}
"""

_VARIABLE = re.compile(r"@([a-z_]+)")


def load_stylesheet(theme: Theme = Theme.DARK) -> str:
    """
    Fills the @variables of the shared template with the theme's palette.
    Unknown variables are left untouched.
    """
    colors = PALETTES[theme]
    return _VARIABLE.sub(lambda m: colors.get(m.group(1), m.group(0)), STYLE_TEMPLATE)
