"""
Dockable widget base class for the history window's side panels.

This module defines:
    - DockableWidget: QDockWidget with configurable features, size constraints,
      and a toggled signal mirroring visibility changes.
"""
from typing import Optional

from PySide6 import QtWidgets, QtCore, QtGui


class DockableWidget(QtWidgets.QDockWidget):
    """Base class for dock widgets: feature flags, size limits and a title bar menu."""
    toggled = QtCore.Signal(bool)

    def __init__(
            self,
            title: str,
            parent: Optional[QtWidgets.QWidget] = None,
            closable: bool = True,
            floatable: bool = True,
            min_width: Optional[int] = None,
            min_height: Optional[int] = None,
            size_hint: Optional[QtCore.QSize] = None,
    ) -> None:
        super().__init__(title, parent=parent)

        features = QtWidgets.QDockWidget.DockWidgetMovable
        if floatable:
            features |= QtWidgets.QDockWidget.DockWidgetFloatable
        if closable:
            features |= QtWidgets.QDockWidget.DockWidgetClosable
        self.setFeatures(features)
        self.setAllowedAreas(QtCore.Qt.AllDockWidgetAreas)

        self._size_hint = size_hint

        if min_width is not None:
            self.setMinimumWidth(min_width)
        if min_height is not None:
            self.setMinimumHeight(min_height)

        self.visibilityChanged.connect(self.toggled.emit)

    def sizeHint(self) -> QtCore.QSize:
        if self._size_hint:
            return self._size_hint
        return super().sizeHint()

    def contextMenuEvent(self, event: QtGui.QContextMenuEvent) -> None:
        """Title bar menu for floating and re-docking the widget."""
        title_height = self.style().pixelMetric(QtWidgets.QStyle.PM_TitleBarHeight)
        if event.pos().y() > title_height:
            super().contextMenuEvent(event)
            return

        menu = QtWidgets.QMenu(self)
        toggle = menu.addAction('Toggle Floating')

        areas = {}
        for name, area in (('Left', QtCore.Qt.LeftDockWidgetArea),
                           ('Right', QtCore.Qt.RightDockWidgetArea),
                           ('Bottom', QtCore.Qt.BottomDockWidgetArea)):
            areas[menu.addAction(f'Dock {name}')] = area

        chosen = menu.exec(event.globalPos())
        if chosen == toggle:
            self.setFloating(not self.isFloating())
        elif chosen in areas:
            window = self.parent()
            while window and not isinstance(window, QtWidgets.QMainWindow):
                window = window.parent()
            if window:
                window.addDockWidget(areas[chosen], self)
        event.accept()
