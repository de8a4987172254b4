"""UI styling utilities for PersonalExpenseTracker.

This module provides:
    - Font and FontDatabase: sized fonts and metrics
    - Theme: supported UI themes (light, dark)
    - Size: standardized size constants and scaling logic
    - Color: standardized color palette for widgets and themes
    - init_stylesheet and apply_theme: application style sheet expansion
"""
import enum
import logging
import math
import os
import re

from PySide6 import QtWidgets, QtGui


class Font(enum.Enum):
    """Enumeration of font weights used by the UI."""

    BlackFont = QtGui.QFont.Black
    BoldFont = QtGui.QFont.DemiBold
    MediumFont = QtGui.QFont.Medium
    ThinFont = QtGui.QFont.Light

    def __call__(self, size):
        """
        Returns a QFont and its metrics for the given size and this font enum.

        Args:
            size (float|int): The desired pixel size.

        Returns:
            tuple: (QFont, QFontMetricsF)
        """
        return font_database().get(size, self)


class FontDatabase:
    """Cache of sized application fonts and their metrics."""

    def __init__(self):
        if not QtWidgets.QApplication.instance():
            msg = 'FontDatabase must be created after a QApplication is initiated.'
            logging.error(msg)
            raise RuntimeError(msg)

        self.family = QtWidgets.QApplication.font().family()
        self.font_cache = {role: {} for role in Font}
        self.metrics_cache = {role: {} for role in Font}

    def get(self, size, role):
        """Retrieve the font and metrics for the given font size and role.

        Args:
            size (float): The font size.
            role (Font): The font role.

        Returns:
            tuple: (QFont, QFontMetricsF)
        """
        if not isinstance(role, Font):
            raise ValueError(f'Invalid font role: {role}. Must be a member of Font.')
        if size <= 0:
            raise RuntimeError(f'Font size must be greater than 0, got {size}')

        if size in self.font_cache[role]:
            return (QtGui.QFont(self.font_cache[role][size]),
                    QtGui.QFontMetricsF(self.metrics_cache[role][size]))

        font = QtGui.QFont(self.family)
        font.setWeight(role.value)
        font.setPixelSize(int(size))

        self.font_cache[role][size] = font
        self.metrics_cache[role][size] = QtGui.QFontMetricsF(font)

        return QtGui.QFont(font), QtGui.QFontMetricsF(self.metrics_cache[role][size])


_font_database = None


def font_database():
    """Return the shared FontDatabase, creating it on first use."""
    global _font_database
    if _font_database is None:
        _font_database = FontDatabase()
    return _font_database


class Theme(enum.StrEnum):
    Light = 'light'
    Dark = 'dark'


class Size(enum.Enum):
    """Enumeration of size values used for UI scaling."""
    SmallText = 11.0
    MediumText = 12.0
    LargeText = 16.0
    Indicator = 4.0
    Separator = 1.0
    Margin = 18.0
    RowHeight = 34.0
    DefaultWidth = 640.0
    DefaultHeight = 480.0

    def __new__(cls, value):
        obj = object.__new__(cls)
        obj._value_ = float(value)
        return obj

    def __call__(self, multiplier=1.0):
        """
        Returns the scaled size value.

        Args:
            multiplier (float): A multiplier to apply to the size.

        Returns:
            int: The scaled size.
        """
        return round(self.value * float(multiplier))

    @property
    def value(self):
        """float: The scaled size value."""
        return self.size(self._value_)

    @classmethod
    def size(cls, value, ui_scale_factor=1.0, dpi=72.0):
        """Scale a value by DPI and UI scale factor."""
        return math.ceil(float(value) * (float(dpi) / 72.0)) * float(ui_scale_factor)


class Color(enum.Enum):
    """Enumeration of colours used across the UI."""

    Transparent = {
        Theme.Light.value: (0, 0, 0, 0),
        Theme.Dark.value: (0, 0, 0, 0),
    }
    VeryDarkBackground = {
        Theme.Light.value: (245, 245, 245),
        Theme.Dark.value: (30, 30, 30),
    }
    DarkBackground = {
        Theme.Light.value: (220, 220, 220),
        Theme.Dark.value: (45, 45, 45),
    }
    Background = {
        Theme.Light.value: (190, 190, 190),
        Theme.Dark.value: (65, 65, 65),
    }
    DisabledText = {
        Theme.Light.value: (120, 120, 120),
        Theme.Dark.value: (135, 135, 135),
    }
    SecondaryText = {
        Theme.Light.value: (70, 70, 70),
        Theme.Dark.value: (185, 185, 185),
    }
    Text = {
        Theme.Light.value: (30, 30, 30),
        Theme.Dark.value: (225, 225, 225),
    }
    SelectedText = {
        Theme.Light.value: (0, 0, 0),
        Theme.Dark.value: (255, 255, 255),
    }
    Blue = {
        Theme.Light.value: (0, 50, 100),
        Theme.Dark.value: (88, 138, 180),
    }
    Red = {
        Theme.Light.value: (179, 94, 94),
        Theme.Dark.value: (229, 114, 114),
    }
    Green = {
        Theme.Light.value: (60, 180, 125),
        Theme.Dark.value: (90, 200, 155),
    }
    Yellow = {
        Theme.Light.value: (233, 146, 1),
        Theme.Dark.value: (253, 166, 1),
    }

    @classmethod
    def _get_theme(cls):
        from ..settings import lib
        theme = lib.settings['theme']
        if theme not in [f.value for f in Theme]:
            theme = Theme.Dark.value
        return theme

    def __new__(cls, v):
        if not isinstance(v, dict):
            raise ValueError(f'Invalid color value: {v}. Must be a dictionary, got {type(v)}: {v}')
        obj = object.__new__(cls)
        obj._value_ = v
        return obj

    def __call__(self, qss=False):
        """
        Returns a QColor or CSS rgba string.

        Args:
            qss (bool): If True, returns a CSS rgba string suitable for QSS.

        Returns:
            QColor or str: A QColor instance if qss=False, otherwise a CSS rgba string.
        """
        theme = self._get_theme()
        color = QtGui.QColor(*self._value_[theme])
        if not qss:
            return color
        return self.rgb(color)

    @staticmethod
    def rgb(color):
        """Returns the CSS rgba string for a QColor."""
        rgb = [str(f) for f in color.getRgb()]
        return f'rgba({",".join(rgb)})'


def init_stylesheet():
    """Loads and expands the style sheet template used by the app.

    Tokens are written as ``<token>`` in ``config/stylesheet.qss`` and are replaced
    by color, size and font values.

    Returns:
        str: The style sheet.
    """
    if not QtWidgets.QApplication.instance():
        raise RuntimeError('init_stylesheet() must be called after a QApplication is initiated.')

    from ..settings import lib
    if not lib.settings.stylesheet_path.is_file():
        raise FileNotFoundError(f'Style sheet file not found: {lib.settings.stylesheet_path}')

    with lib.settings.stylesheet_path.open('r', encoding='utf-8') as f:
        qss = f.read()

    kwargs = {'FontFamily': font_database().family}

    for color in Color:
        kwargs[color.name] = Color.rgb(color())

    for size in Size:
        for i in [float(f) / 10.0 for f in range(1, 31)]:
            kwargs[f'{size.name}@{i:.1f}'] = round(size() * i)

    for match in re.finditer(r'<(.*?)>', qss):
        key = match.group(1)
        if key not in kwargs:
            raise KeyError(f'Key {key} not found in kwargs!')
        qss = qss.replace(f'<{key}>', str(kwargs[key]))

    return qss


def apply_theme() -> None:
    """Set the style sheet for the entire app.

    This function should be called after the QApplication is created.
    """
    if not QtWidgets.QApplication.instance():
        raise RuntimeError('apply_theme() must be called after a QApplication is initiated.')

    if os.environ.get('PERSONALEXPENSETRACKER_DISABLE_STYLESHEET', '').lower() in ['1', 'true', 'yes']:
        logging.warning('Stylesheet disabled by environment variable.')
        return

    qss = init_stylesheet()
    QtWidgets.QApplication.instance().setStyleSheet(qss)
