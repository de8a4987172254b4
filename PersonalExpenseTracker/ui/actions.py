"""Application-wide Qt signals for PersonalExpenseTracker.

This module provides:
    - Signals: custom Qt signals for configuration changes, history load requests and
      results, window navigation (showMainMenu, showTransactionHistory, tracker stubs),
      and user-facing errors and warnings.
"""
import logging

from PySide6 import QtCore


class Signals(QtCore.QObject):
    """Centralized Qt signals for application config, data, and UI events."""
    initializationRequested = QtCore.Signal()

    configSectionChanged = QtCore.Signal(str)
    metadataChanged = QtCore.Signal(str, object)

    historyRequested = QtCore.Signal(object)  # FilterCriteria
    historyLoaded = QtCore.Signal(object)  # HistoryResult

    showMainMenu = QtCore.Signal()
    showTransactionHistory = QtCore.Signal()
    showTracker = QtCore.Signal()
    showGoalTracker = QtCore.Signal()
    showSubscriptionTracker = QtCore.Signal()
    showLogs = QtCore.Signal()

    error = QtCore.Signal(str)
    warning = QtCore.Signal(str)

    def __init__(self):
        super().__init__()
        self._connect_signals()

    def _connect_signals(self):
        @QtCore.Slot(object)
        def history_requested(criteria: object) -> None:
            from ..core import service
            service.load_history(criteria)

        self.historyRequested.connect(history_requested)

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, value: object) -> None:
            if key != 'theme':
                return

            try:
                from . import ui
                ui.apply_theme()
            except Exception as ex:
                logging.debug(f'Error applying theme: {ex}')

        self.metadataChanged.connect(metadata_changed)


signals = Signals()
