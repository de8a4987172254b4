"""Placeholder tracker windows reachable from the main menu.

The Tracker, Goal Tracker and Subscription Tracker windows are navigation targets
only and exchange no data with the rest of the application.
"""
from typing import Optional

from PySide6 import QtWidgets, QtCore

from . import ui


class PlaceholderWindow(QtWidgets.QWidget):
    """A top-level window showing its title and a not-available note."""
    title: str = ''

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent, f=QtCore.Qt.Window)
        self.setWindowTitle(self.title)
        self.setObjectName(f'PersonalExpenseTracker{self.title.replace(" ", "")}Window')

        layout = QtWidgets.QVBoxLayout(self)
        margin = ui.Size.Margin(1.0)
        layout.setContentsMargins(margin, margin, margin, margin)

        label = QtWidgets.QLabel(self.title, self)
        label.setObjectName('TitleLabel')
        label.setAlignment(QtCore.Qt.AlignCenter)
        layout.addWidget(label)

        note = QtWidgets.QLabel('This feature is not available yet.', self)
        note.setObjectName('SummaryLabel')
        note.setAlignment(QtCore.Qt.AlignCenter)
        layout.addWidget(note)

        close_button = QtWidgets.QPushButton('Close', self)
        close_button.clicked.connect(self.close)
        layout.addWidget(close_button, 0, QtCore.Qt.AlignCenter)

    def sizeHint(self) -> QtCore.QSize:
        return QtCore.QSize(ui.Size.DefaultWidth(0.6), ui.Size.DefaultHeight(0.5))


class TrackerWindow(PlaceholderWindow):
    title = 'Tracker'


class GoalTrackerWindow(PlaceholderWindow):
    title = 'Goal Tracker'


class SubscriptionTrackerWindow(PlaceholderWindow):
    title = 'Subscription Tracker'
