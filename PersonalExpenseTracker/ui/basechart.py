"""Shared chart slice, model, and base view for category-based charts."""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from . import ui
from .actions import signals
from ..data import data
from ..settings import lib, locale

QT_CIRCLE: int = 360 * 16
QT_ROTATION: int = 90 * 16


@dataclass(slots=True)
class ChartSlice:
    """Slice data plus geometry computed by the view."""
    category: str
    amount_txt: str
    value: Decimal
    color: QtGui.QColor
    start_qt: int
    span_qt: int
    display_name: str = ''
    base_rect: QtCore.QRect = field(default_factory=QtCore.QRect, repr=False)
    popped_rect: QtCore.QRect = field(default_factory=QtCore.QRect, repr=False)
    base_path: QtGui.QPainterPath = field(default_factory=QtGui.QPainterPath, repr=False)
    popped_path: QtGui.QPainterPath = field(default_factory=QtGui.QPainterPath, repr=False)
    mid_deg: float = 0.0


def category_color(category: str, config: dict) -> QtGui.QColor:
    """Return the configured color of a category, or the text color when unset."""
    color = QtGui.QColor(config.get(category, {}).get('color', ''))
    if color.isValid():
        return color
    return ui.Color.Text()


class ChartModel:
    """Turns chart points into ChartSlice instances."""

    def __init__(self) -> None:
        self._points: List[data.ChartPoint] = []
        self._slices: List[ChartSlice] = []
        self._version: int = 0

    @property
    def slices(self) -> List[ChartSlice]:
        return self._slices

    @property
    def points(self) -> List[data.ChartPoint]:
        return self._points

    @property
    def version(self) -> int:
        return self._version

    def rebuild(self, points: Optional[List[data.ChartPoint]] = None) -> None:
        """Populate slices from chart points.

        Points with a value of zero or less do not get a slice. The slice spans are
        Qt angles (1/16th of a degree) starting at twelve o'clock, and the rounding
        leftover is added to the largest slice so the spans always close the circle.

        Args:
            points (list[ChartPoint], optional): New points. The last points are reused when omitted.
        """
        if points is not None:
            self._points = list(points)

        self._version += 1

        points = [p for p in self._points if p.value > 0]
        total = sum((p.value for p in points), Decimal('0'))
        if not points or total <= 0:
            logging.debug('ChartModel: no data available')
            self._slices = []
            return

        spans = [int(round(p.value / total * QT_CIRCLE)) for p in points]
        leftover = QT_CIRCLE - sum(spans)
        if leftover:
            largest = max(range(len(points)), key=lambda i: points[i].value)
            spans[largest] += leftover

        config = lib.settings.get_section('categories') or {}
        locale_name = lib.settings['locale'] or locale.DEFAULT_LOCALE

        cursor = 0
        slices: List[ChartSlice] = []
        for point, span_qt in zip(points, spans):
            slices.append(
                ChartSlice(
                    category=point.label,
                    amount_txt=locale.format_currency_value(point.value, locale_name),
                    value=point.value,
                    color=category_color(point.label, config),
                    start_qt=(cursor + QT_ROTATION) % QT_CIRCLE,
                    span_qt=span_qt,
                    display_name=config.get(point.label, {}).get('display_name', point.label),
                )
            )
            cursor += span_qt

        self._slices = slices

    def clear(self) -> None:
        """Clear the model."""
        self._points = []
        self._slices = []
        self._version += 1


class BaseChartView(QtWidgets.QWidget):
    """Base widget for interactive category charts.

    The view listens to ``signals.historyLoaded`` and redraws itself from the loaded
    chart points. Clicking a slice emits :attr:`categoryClicked`.
    """
    hoverChanged = QtCore.Signal(int)
    categoryClicked = QtCore.Signal(str)

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._show_legend: bool = True
        self._show_tooltip: bool = True
        self._geom_sig: tuple[int, int, int] = (-1, -1, -1)
        self._hover_index: int = -1

        self._anim_progress = 1.0

        self.model = ChartModel()

        self.setMouseTracking(True)
        self.setContextMenuPolicy(QtCore.Qt.ActionsContextMenu)

        self._animation = QtCore.QVariantAnimation(self)
        self._animation.setDuration(400)
        self._animation.setStartValue(0.0)
        self._animation.setEndValue(1.0)
        self._animation.setEasingCurve(QtCore.QEasingCurve.OutQuad)

        self._create_ui()
        self._connect_signals()
        self._init_actions()

    def _create_ui(self) -> None:
        self.setMinimumSize(ui.Size.DefaultWidth(0.4), ui.Size.DefaultWidth(0.4))
        self.setSizePolicy(QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Expanding)

    def _connect_signals(self) -> None:
        @QtCore.Slot(object)
        def history_loaded(result: object) -> None:
            self.init_data(result.chart_points)

        signals.historyLoaded.connect(history_loaded)

        @QtCore.Slot(str)
        def config_changed(section: str) -> None:
            if section == 'categories':
                self.init_data()

        signals.configSectionChanged.connect(config_changed)

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, _: object) -> None:
            if key in ('locale', 'theme'):
                self.init_data()

        signals.metadataChanged.connect(metadata_changed)

        @QtCore.Slot(object)
        def animation_value_changed(value: float) -> None:
            self._anim_progress = value
            self.update()

        self._animation.valueChanged.connect(animation_value_changed)

    def init_data(self, points: Optional[List[data.ChartPoint]] = None) -> None:
        """Rebuild the slices and restart the reveal animation."""
        self.model.rebuild(points)
        self._geom_sig = (-1, -1, -1)
        self._hover_index = -1
        self._animation.stop()
        self._animation.start()
        self.update()

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        self._recalc_geometry()

        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)

        self._draw_background(painter)

        if not self.model.slices:
            self._draw_empty(painter)
            painter.end()
            return

        self._draw_slices(painter)

        if self._show_legend:
            self._draw_legend(painter)

        if self._show_tooltip:
            self._draw_tooltip(painter)

        painter.end()

    def _draw_background(self, painter: QtGui.QPainter) -> None:
        painter.fillRect(self.rect(), ui.Color.VeryDarkBackground())
        offset = ui.Size.Indicator(1.0)
        inner = self.rect().adjusted(offset, offset, -offset, -offset)
        painter.setBrush(ui.Color.DarkBackground())
        painter.setPen(QtCore.Qt.NoPen)
        painter.drawRoundedRect(inner, ui.Size.Indicator(2.0), ui.Size.Indicator(2.0))

    def _draw_empty(self, painter: QtGui.QPainter) -> None:
        font, _ = ui.Font.MediumFont(ui.Size.MediumText())
        painter.setFont(font)
        painter.setPen(ui.Color.DisabledText())
        painter.drawText(self.rect(), QtCore.Qt.AlignCenter, data.NO_DATA_MESSAGE)

    # Subclasses must implement:
    def _recalc_geometry(self) -> None:
        raise NotImplementedError

    def _draw_slices(self, painter: QtGui.QPainter) -> None:
        raise NotImplementedError

    def _slice_at(self, pos: QtCore.QPoint) -> int:
        raise NotImplementedError

    def _draw_legend(self, painter: QtGui.QPainter) -> None:
        raise NotImplementedError

    def _draw_tooltip(self, painter: QtGui.QPainter) -> None:
        raise NotImplementedError

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:
        idx = self._slice_at(event.position().toPoint())
        if idx != self._hover_index:
            self._hover_index = idx
            self.hoverChanged.emit(idx)
        self.update()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event: QtCore.QEvent) -> None:
        if self._hover_index != -1:
            self._hover_index = -1
            self.hoverChanged.emit(-1)
            self.update()
        super().leaveEvent(event)

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        idx = self._slice_at(event.position().toPoint())
        if 0 <= idx < len(self.model.slices):
            self.categoryClicked.emit(self.model.slices[idx].category)
        super().mousePressEvent(event)

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:
        self._geom_sig = (-1, -1, -1)
        self.update()
        super().resizeEvent(event)

    def _init_actions(self) -> None:
        @QtCore.Slot(bool)
        def toggle_legend(checked: bool) -> None:
            self._show_legend = checked
            self.update()

        action = QtGui.QAction('Toggle Legend', self)
        action.setCheckable(True)
        action.setChecked(self._show_legend)
        action.setToolTip('Show/hide legend')
        action.setShortcut('Alt+1')
        action.setShortcutContext(QtCore.Qt.WidgetShortcut)
        action.triggered.connect(toggle_legend)
        self.addAction(action)

        @QtCore.Slot(bool)
        def toggle_tooltip(checked: bool) -> None:
            self._show_tooltip = checked
            self.update()

        action = QtGui.QAction('Toggle Tooltip', self)
        action.setCheckable(True)
        action.setChecked(self._show_tooltip)
        action.setToolTip('Show/hide tooltip')
        action.setShortcut('Alt+2')
        action.setShortcutContext(QtCore.Qt.WidgetShortcut)
        action.triggered.connect(toggle_tooltip)
        self.addAction(action)
