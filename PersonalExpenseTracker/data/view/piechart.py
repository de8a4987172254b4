"""Pie chart view for visualizing spending per category."""
import math
from typing import Optional, List

from PySide6 import QtCore, QtGui, QtWidgets

from ...ui import ui
from ...ui.basechart import BaseChartView


class PieChartView(BaseChartView):
    """Exploded-view pie chart of the category totals."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.offset_px = ui.Size.Indicator(1.0)
        self.hover_offset_px = ui.Size.Indicator(3.0)

    @staticmethod
    def _slice_path(rect: QtCore.QRect, start_deg: float, span_deg: float) -> QtGui.QPainterPath:
        path = QtGui.QPainterPath()
        path.moveTo(rect.center())
        path.arcTo(rect, start_deg, span_deg)
        path.closeSubpath()
        return path

    def _recalc_geometry(self) -> None:
        sig = (self.model.version, self.width(), self.height())
        if sig == self._geom_sig:
            return

        if not self.model.slices:
            self._geom_sig = sig
            return

        widget_rect = self.rect()
        edge = min(widget_rect.width(), widget_rect.height())
        outer = QtCore.QRect(
            widget_rect.x() + (widget_rect.width() - edge) // 2,
            widget_rect.y() + (widget_rect.height() - edge) // 2,
            edge,
            edge,
        )

        # leave room for the legend labels around the pie
        margin = ui.Size.Margin(2.0) + self.hover_offset_px
        inner = outer.adjusted(margin, margin, -margin, -margin)

        for sl in self.model.slices:
            start_deg = sl.start_qt / 16.0
            span_deg = sl.span_qt / 16.0
            sl.mid_deg = start_deg + span_deg / 2.0
            theta = math.radians(sl.mid_deg)

            # a single slice covers the whole circle and is not exploded
            offset = 0 if len(self.model.slices) == 1 else self.offset_px
            dx = int(round(offset * math.cos(theta)))
            dy = int(round(-offset * math.sin(theta)))
            hover_dx = int(round(self.hover_offset_px * math.cos(theta)))
            hover_dy = int(round(-self.hover_offset_px * math.sin(theta)))

            sl.base_rect = QtCore.QRect(inner.translated(dx, dy))
            sl.popped_rect = QtCore.QRect(inner.translated(hover_dx, hover_dy))

            sl.base_path = self._slice_path(sl.base_rect, start_deg, span_deg)
            sl.popped_path = self._slice_path(sl.popped_rect, start_deg, span_deg)

        self._geom_sig = sig

    def _slice_at(self, pos: QtCore.QPoint) -> int:
        self._recalc_geometry()
        for index, sl in enumerate(self.model.slices):
            if sl.popped_path.contains(QtCore.QPointF(pos)):
                return index
        return -1

    def _draw_slices(self, painter: QtGui.QPainter) -> None:
        # the reveal animation sweeps the slices open from twelve o'clock
        sweep = int(self._anim_progress * 360 * 16)
        drawn = 0

        for idx, sl in enumerate(self.model.slices):
            if drawn >= sweep:
                break
            span_qt = min(sl.span_qt, sweep - drawn)
            drawn += sl.span_qt

            rect = sl.popped_rect if idx == self._hover_index else sl.base_rect
            painter.setBrush(sl.color)
            painter.setPen(QtCore.Qt.NoPen)
            if span_qt >= 360 * 16:
                painter.drawEllipse(rect)
            else:
                painter.drawPie(rect, sl.start_qt, span_qt)

    def _draw_legend(self, painter: QtGui.QPainter) -> None:
        pad = ui.Size.Indicator(1.0)
        font, metrics = ui.Font.BoldFont(ui.Size.SmallText())
        painter.setFont(font)

        placed_boxes: List[QtCore.QRectF] = []
        bound = QtCore.QRectF(self.rect())

        for sl in sorted(self.model.slices, key=lambda s: s.mid_deg):
            centre = sl.base_rect.center()
            theta = math.radians(sl.mid_deg)
            text = sl.display_name or sl.category
            txt_w = metrics.horizontalAdvance(text)
            txt_h = metrics.height()

            radius = sl.base_rect.width() / 2.0 + pad * 2
            box = QtCore.QRectF()
            for _ in range(64):
                cx = centre.x() + (radius + txt_w / 2.0 * abs(math.cos(theta))) * math.cos(theta)
                cy = centre.y() - (radius + txt_h / 2.0 * abs(math.sin(theta))) * math.sin(theta)
                box = QtCore.QRectF(cx - txt_w / 2 - pad, cy - txt_h / 2 - pad, txt_w + pad * 2, txt_h + pad * 2)
                if not any(box.intersects(other) for other in placed_boxes):
                    break
                radius += txt_h / 2.0
            placed_boxes.append(box)

            box.moveLeft(max(bound.left(), min(box.left(), bound.right() - box.width())))
            box.moveTop(max(bound.top(), min(box.top(), bound.bottom() - box.height())))

            painter.setPen(sl.color)
            painter.drawText(QtCore.QPointF(box.x() + pad, box.y() + pad + metrics.ascent()), text)

    def _draw_tooltip(self, painter: QtGui.QPainter) -> None:
        if not 0 <= self._hover_index < len(self.model.slices):
            return

        sl = self.model.slices[self._hover_index]
        cursor_pos = self.mapFromGlobal(QtGui.QCursor.pos())

        text = f'{sl.display_name or sl.category}: {sl.amount_txt}'
        font, metrics = ui.Font.BoldFont(ui.Size.MediumText())
        painter.setFont(font)

        pad = ui.Size.Indicator(2.0)
        swatch = metrics.height()
        width = swatch + pad + metrics.horizontalAdvance(text) + pad * 2
        height = swatch + pad * 2

        x = max(self.rect().left(), min(cursor_pos.x() - width / 2, self.rect().right() - width))
        y = cursor_pos.y() - height - pad
        if y < self.rect().top():
            y = cursor_pos.y() + pad

        bg = QtCore.QRectF(x, y, width, height)
        painter.setBrush(ui.Color.VeryDarkBackground())
        painter.setPen(QtCore.Qt.NoPen)
        painter.drawRoundedRect(bg, pad, pad)

        painter.setBrush(sl.color)
        painter.drawEllipse(QtCore.QRectF(bg.x() + pad, bg.y() + pad, swatch, swatch))

        painter.setPen(ui.Color.Text())
        painter.drawText(
            QtCore.QPointF(bg.x() + pad + swatch + pad, bg.y() + pad + metrics.ascent()),
            text,
        )
