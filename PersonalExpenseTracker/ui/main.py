"""Main menu window and window navigation for PersonalExpenseTracker.

This module defines:
    - show(): initialize and display the main menu
    - TitleLabel: the application title painted from the settings
    - MainWindow: the main menu with buttons opening the other windows
"""
import logging
from typing import Optional

from PySide6 import QtWidgets, QtCore, QtGui

from . import ui
from .actions import signals
from .history import TransactionHistoryWindow
from .trackers import GoalTrackerWindow, SubscriptionTrackerWindow, TrackerWindow
from ..settings.lib import app_name

widget = None


def show():
    global widget

    if widget is None:
        widget = MainWindow()

    widget.show()


class TitleLabel(QtWidgets.QWidget):
    """Application title label following the ``name`` setting."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('PersonalExpenseTrackerTitleLabel')
        self.setSizePolicy(QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Fixed)

        self._connect_signals()
        self.update_title()

    def _connect_signals(self) -> None:
        @QtCore.Slot(str, object)
        def metadata_changed(key: str, value: object) -> None:
            if key == 'name':
                self.update_title()

        signals.metadataChanged.connect(metadata_changed)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)

        font, _ = self.get_font()
        painter.setFont(font)
        painter.setPen(ui.Color.Text())
        painter.drawText(self.rect(), QtCore.Qt.AlignCenter, self.get_title())
        painter.end()

    @staticmethod
    def get_font():
        return ui.Font.BlackFont(ui.Size.LargeText(1.5))

    @staticmethod
    def get_title():
        from ..settings import lib
        v = lib.settings['name']
        return v or 'Untitled'

    @QtCore.Slot()
    def update_title(self) -> None:
        _, metrics = self.get_font()
        self.setFixedHeight(int(metrics.height()) + ui.Size.Margin(1.0))
        self.update()


class MainWindow(QtWidgets.QMainWindow):
    """Main menu. Opening the transaction history hides the menu until Back is pressed."""

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setWindowTitle(app_name)
        self.setObjectName('PersonalExpenseTrackerMainWindow')

        self.history_window: Optional[TransactionHistoryWindow] = None
        self.tracker_window: Optional[TrackerWindow] = None
        self.goal_tracker_window: Optional[GoalTrackerWindow] = None
        self.subscription_tracker_window: Optional[SubscriptionTrackerWindow] = None

        self.buttons: dict[str, QtWidgets.QPushButton] = {}

        self._create_ui()
        self._connect_signals()

    def _create_ui(self) -> None:
        central = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(central)
        margin = ui.Size.Margin(2.0)
        layout.setContentsMargins(margin, margin, margin, margin)
        layout.setSpacing(ui.Size.Margin(0.5))
        self.setCentralWidget(central)

        layout.addWidget(TitleLabel(parent=central))
        layout.addStretch(1)

        button_configs = [
            ('tracker', 'Tracker', signals.showTracker),
            ('goal_tracker', 'Goal Tracker', signals.showGoalTracker),
            ('subscription_tracker', 'Subscription Tracker', signals.showSubscriptionTracker),
            ('history', 'Transaction History', signals.showTransactionHistory),
        ]
        for key, label, signal in button_configs:
            button = QtWidgets.QPushButton(label, central)
            button.setObjectName(f'PersonalExpenseTracker{label.replace(" ", "")}Button')
            button.setMinimumHeight(ui.Size.RowHeight(1.2))
            button.clicked.connect(signal)
            layout.addWidget(button)
            self.buttons[key] = button

        layout.addStretch(1)

    def _connect_signals(self) -> None:
        signals.showMainMenu.connect(self.show_main_menu)
        signals.showTransactionHistory.connect(self.show_transaction_history)
        signals.showTracker.connect(lambda: self._show_tracker('tracker_window', TrackerWindow))
        signals.showGoalTracker.connect(lambda: self._show_tracker('goal_tracker_window', GoalTrackerWindow))
        signals.showSubscriptionTracker.connect(
            lambda: self._show_tracker('subscription_tracker_window', SubscriptionTrackerWindow)
        )

    def sizeHint(self):
        return QtCore.QSize(ui.Size.DefaultWidth(0.6), ui.Size.DefaultHeight(0.9))

    @QtCore.Slot()
    def show_main_menu(self) -> None:
        if self.history_window is not None and self.history_window.isVisible():
            self.history_window.hide()
        self.show()
        self.raise_()
        self.activateWindow()

    @QtCore.Slot()
    def show_transaction_history(self) -> None:
        if self.history_window is None:
            self.history_window = TransactionHistoryWindow()
            logging.debug('Created the transaction history window')

        self.hide()
        self.history_window.show()
        self.history_window.raise_()
        self.history_window.activateWindow()

    def _show_tracker(self, attr: str, cls: type) -> None:
        window = getattr(self, attr)
        if window is None:
            window = cls()
            setattr(self, attr, window)
        window.show()
        window.raise_()
        window.activateWindow()
