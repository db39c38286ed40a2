import pytest

from ui.styles import DARK_COLORS, LIGHT_COLORS, Theme, load_stylesheet


@pytest.mark.parametrize("theme,colors", [(Theme.DARK, DARK_COLORS), (Theme.LIGHT, LIGHT_COLORS)])
def test_all_variables_are_substituted(theme, colors):
    qss = load_stylesheet(theme)

    assert "@" not in qss
    assert colors["window_bg"] in qss
    assert colors["accent_hover"] in qss


def test_palettes_define_the_same_variables():
    assert DARK_COLORS.keys() == LIGHT_COLORS.keys()
