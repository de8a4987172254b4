"""Log views and dock widget for displaying log messages.

This module provides:
    - LogTableView: table view for formatted log entries
    - LogDockWidget: dockable container with level filtering and clear actions
"""
import logging

from PySide6 import QtCore, QtWidgets, QtGui

from . import log
from .model import LogFilterProxyModel, LogTableModel, Columns, get_handler
from ..ui import ui
from ..ui.dockable_widget import DockableWidget


class LogTableView(QtWidgets.QTableView):
    """A QTableView displaying log messages from LogTableModel."""

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self.setWordWrap(False)

        self._init_model()
        self._init_headers()
        self._connect_signals()

    def _init_model(self):
        proxy = LogFilterProxyModel(self)
        proxy.setSourceModel(LogTableModel(parent=self))
        self.setModel(proxy)

    def _init_headers(self):
        header = self.horizontalHeader()
        header.setDefaultAlignment(QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter)
        header.setDefaultSectionSize(ui.Size.DefaultWidth(0.25))
        header.setSectionResizeMode(Columns.Message.value, QtWidgets.QHeaderView.Stretch)

        header = self.verticalHeader()
        header.setDefaultSectionSize(ui.Size.RowHeight(0.8))
        header.setHidden(True)

    def _connect_signals(self):
        self.model().rowsInserted.connect(self.scrollToBottom)

    def sizeHint(self):
        return QtCore.QSize(
            ui.Size.DefaultWidth(1.0),
            ui.Size.DefaultHeight(0.4)
        )


class LogDockWidget(DockableWidget):
    """Dockable widget for viewing app logs."""

    def __init__(self, parent=None) -> None:
        super().__init__('Logs', parent)
        self.setObjectName('PersonalExpenseTrackerLogDockWidget')

        self.view = LogTableView(self)
        self.view.setContextMenuPolicy(QtCore.Qt.ActionsContextMenu)
        self.setWidget(self.view)

        self._init_actions()
        self._connect_signals()

    def _connect_signals(self) -> None:
        self.visibilityChanged.connect(self.on_visibility_changed)

    def _init_actions(self) -> None:
        proxy = self.view.model()
        levels = [
            ('Debug', logging.DEBUG),
            ('Info', logging.INFO),
            ('Warning', logging.WARNING),
            ('Error', logging.ERROR),
            ('Critical', logging.CRITICAL),
        ]

        action = QtGui.QAction('App Level', self)
        menu = QtWidgets.QMenu(self)
        action_group = QtGui.QActionGroup(self)
        action_group.setExclusive(True)
        for name, lvl in levels:
            act = menu.addAction(name)
            act.setData(lvl)
            act.setCheckable(True)
            act.setChecked(logging.getLogger().level == lvl)
            action_group.addAction(act)
        action_group.triggered.connect(lambda a: log.set_logging_level(a.data()))
        action.setMenu(menu)
        action.setToolTip('Set application logging level')
        self.view.addAction(action)

        action = QtGui.QAction('View Filter', self)
        menu = QtWidgets.QMenu(self)
        action_group = QtGui.QActionGroup(self)
        action_group.setExclusive(True)
        for name, lvl in levels:
            act = menu.addAction(name)
            act.setData(lvl)
            act.setCheckable(True)
            act.setChecked(proxy.filter_level() == lvl)
            action_group.addAction(act)
        action_group.triggered.connect(lambda a: proxy.set_filter_level(a.data()))
        action.setMenu(menu)
        action.setToolTip('Filter view by minimum logging level')
        self.view.addAction(action)

        action = QtGui.QAction('Clear Logs', self)
        action.setToolTip('Clear all log entries')
        action.triggered.connect(self.clear_logs)
        self.view.addAction(action)

    @QtCore.Slot()
    def clear_logs(self) -> None:
        try:
            get_handler().clear_logs()
        except RuntimeError:
            logging.warning('TankHandler not found; cannot clear underlying logs.')
        self.view.model().sourceModel().clear_logs()

    @QtCore.Slot(bool)
    def on_visibility_changed(self, visible: bool) -> None:
        model = self.view.model().sourceModel()
        if visible:
            model.resume()
            model.fetch_new_logs()
        else:
            model.pause()
