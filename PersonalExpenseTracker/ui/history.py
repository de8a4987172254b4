"""Transaction history window.

This module defines:
    - default_date_range(): the date range shown when the window opens
    - FilterBar: date range, category and amount inputs with Search and Back buttons
    - SummaryWidget: total and per-category labels
    - TransactionHistoryWindow: the window composing the filter bar, transactions table,
      summary, pie chart and log dock

The widgets hold no business logic: every filter change is turned into a
:class:`~PersonalExpenseTracker.data.data.FilterCriteria` and sent through
``signals.historyRequested``; the results arrive on ``signals.historyLoaded``.
"""
import datetime
import logging
from typing import Optional

from PySide6 import QtWidgets, QtCore
from dateutil.relativedelta import relativedelta

from . import ui
from .actions import signals
from ..data import data
from ..data.model.transaction import TransactionsModel, TransactionsSortFilterProxyModel
from ..data.view.piechart import PieChartView
from ..log.view import LogDockWidget
from ..settings import lib, locale

STATUS_MESSAGE_TIMEOUT: int = 8000


def default_date_range(today: Optional[datetime.date] = None) -> tuple[datetime.date, datetime.date]:
    """Return the (date_from, date_to) range covering the configured number of months up to today."""
    today = today or datetime.date.today()
    span = lib.settings['span'] or 1
    return today - relativedelta(months=span), today


class FilterBar(QtWidgets.QWidget):
    """Inputs for the history filter criteria.

    Emits :attr:`criteriaChanged` with a new FilterCriteria when Search is clicked, the
    category changes or Return is pressed in the amount field.
    """
    criteriaChanged = QtCore.Signal(object)
    backRequested = QtCore.Signal()

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('PersonalExpenseTrackerFilterBar')

        self.date_from_editor: QtWidgets.QDateEdit
        self.date_to_editor: QtWidgets.QDateEdit
        self.category_editor: QtWidgets.QComboBox
        self.amount_editor: QtWidgets.QLineEdit
        self.search_button: QtWidgets.QPushButton
        self.back_button: QtWidgets.QPushButton

        self._create_ui()
        self._connect_signals()
        self.init_data()

    def _create_ui(self) -> None:
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(ui.Size.Indicator(2.0))

        def _date_editor() -> QtWidgets.QDateEdit:
            editor = QtWidgets.QDateEdit(self)
            editor.setCalendarPopup(True)
            editor.setDisplayFormat('yyyy-MM-dd')
            return editor

        self.date_from_editor = _date_editor()
        self.date_to_editor = _date_editor()

        self.category_editor = QtWidgets.QComboBox(self)
        self.category_editor.setMinimumWidth(ui.Size.DefaultWidth(0.2))

        self.amount_editor = QtWidgets.QLineEdit(self)
        self.amount_editor.setPlaceholderText('Amount or range, e.g. 500 or 100-500')
        self.amount_editor.setClearButtonEnabled(True)

        self.search_button = QtWidgets.QPushButton('Search', self)
        self.search_button.setDefault(True)
        self.back_button = QtWidgets.QPushButton('Back', self)

        layout.addWidget(QtWidgets.QLabel('From', self))
        layout.addWidget(self.date_from_editor)
        layout.addWidget(QtWidgets.QLabel('To', self))
        layout.addWidget(self.date_to_editor)
        layout.addWidget(QtWidgets.QLabel('Category', self))
        layout.addWidget(self.category_editor)
        layout.addWidget(QtWidgets.QLabel('Amount', self))
        layout.addWidget(self.amount_editor, 1)
        layout.addWidget(self.search_button)
        layout.addWidget(self.back_button)

    def _connect_signals(self) -> None:
        self.search_button.clicked.connect(self.emit_criteria)
        self.amount_editor.returnPressed.connect(self.emit_criteria)
        self.category_editor.currentIndexChanged.connect(self.emit_criteria)
        self.back_button.clicked.connect(self.backRequested)

        @QtCore.Slot(str)
        def config_changed(section: str) -> None:
            if section == 'categories':
                self.init_categories()

        signals.configSectionChanged.connect(config_changed)

    def init_data(self) -> None:
        """Reset the inputs to the default date range, all categories and no amount."""
        date_from, date_to = default_date_range()
        self.date_from_editor.setDate(QtCore.QDate(date_from.year, date_from.month, date_from.day))
        self.date_to_editor.setDate(QtCore.QDate(date_to.year, date_to.month, date_to.day))
        self.amount_editor.clear()
        self.init_categories()

    def init_categories(self) -> None:
        """Populate the category combo box with 'All' and the configured categories."""
        current = self.category_editor.currentData() or lib.ALL_CATEGORIES
        config = lib.settings.get_section('categories') or {}

        self.category_editor.blockSignals(True)
        try:
            self.category_editor.clear()
            self.category_editor.addItem(lib.ALL_CATEGORIES, userData=lib.ALL_CATEGORIES)
            for name in lib.settings.categories():
                self.category_editor.addItem(config[name].get('display_name') or name, userData=name)

            idx = self.category_editor.findData(current)
            self.category_editor.setCurrentIndex(max(idx, 0))
        finally:
            self.category_editor.blockSignals(False)

    def set_category(self, category: str) -> None:
        """Select a category by name. Changing the selection emits new criteria."""
        idx = self.category_editor.findData(category, flags=QtCore.Qt.MatchFixedString)
        if idx < 0:
            logging.debug(f'Category "{category}" is not in the category list.')
            return
        self.category_editor.setCurrentIndex(idx)

    def criteria(self) -> data.FilterCriteria:
        """Read the current inputs into a FilterCriteria."""
        return data.FilterCriteria(
            date_from=self.date_from_editor.date().toPython(),
            date_to=self.date_to_editor.date().toPython(),
            category=self.category_editor.currentData() or lib.ALL_CATEGORIES,
            amount_spec=self.amount_editor.text(),
        )

    @QtCore.Slot()
    def emit_criteria(self) -> None:
        self.criteriaChanged.emit(self.criteria())


class SummaryWidget(QtWidgets.QWidget):
    """Shows the grand total and the per-category totals of the last history load."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(ui.Size.Indicator(1.0))

        self.total_label = QtWidgets.QLabel(self)
        self.total_label.setObjectName('TotalLabel')
        self.summary_label = QtWidgets.QLabel(self)
        self.summary_label.setObjectName('SummaryLabel')
        self.summary_label.setAlignment(QtCore.Qt.AlignLeft | QtCore.Qt.AlignTop)
        self.summary_label.setWordWrap(True)

        layout.addWidget(self.total_label)
        layout.addWidget(self.summary_label, 1)

        self.set_summary(data.Summary())

    def set_summary(self, summary: data.Summary) -> None:
        total_text, summary_text = data.format_summary(summary, lib.settings['locale'] or locale.DEFAULT_LOCALE)
        self.total_label.setText(total_text)
        self.summary_label.setText(summary_text)


class TransactionHistoryWindow(QtWidgets.QMainWindow):
    """Window listing, summarizing and charting the filtered transactions."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('PersonalExpenseTrackerTransactionHistoryWindow')
        self.setWindowTitle('Transaction History')

        self.filter_bar: FilterBar
        self.table_view: QtWidgets.QTableView
        self.summary_widget: SummaryWidget
        self.chart_view: PieChartView
        self.log_view: LogDockWidget

        self._create_ui()
        self._connect_signals()

    def _create_ui(self) -> None:
        central = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(central)
        margin = ui.Size.Margin(1.0)
        layout.setContentsMargins(margin, margin, margin, margin)
        layout.setSpacing(ui.Size.Margin(0.5))
        self.setCentralWidget(central)

        self.filter_bar = FilterBar(parent=central)
        layout.addWidget(self.filter_bar)

        splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal, central)
        layout.addWidget(splitter, 1)

        model = TransactionsModel(parent=self)
        proxy = TransactionsSortFilterProxyModel(parent=self)
        proxy.setSourceModel(model)

        self.table_view = QtWidgets.QTableView(splitter)
        self.table_view.setObjectName('PersonalExpenseTrackerTransactionsView')
        self.table_view.setModel(proxy)
        self.table_view.setSortingEnabled(True)
        self.table_view.setAlternatingRowColors(True)
        self.table_view.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.table_view.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.table_view.verticalHeader().setVisible(False)
        self.table_view.verticalHeader().setDefaultSectionSize(ui.Size.RowHeight(1.0))
        self.table_view.horizontalHeader().setStretchLastSection(True)
        self.table_view.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)

        side = QtWidgets.QWidget(splitter)
        side_layout = QtWidgets.QVBoxLayout(side)
        side_layout.setContentsMargins(0, 0, 0, 0)
        side_layout.setSpacing(ui.Size.Margin(0.5))

        self.summary_widget = SummaryWidget(parent=side)
        side_layout.addWidget(self.summary_widget)

        self.chart_view = PieChartView(parent=side)
        self.chart_view.setObjectName('PersonalExpenseTrackerPieChartView')
        side_layout.addWidget(self.chart_view, 1)

        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)

        self.log_view = LogDockWidget(parent=self)
        self.addDockWidget(QtCore.Qt.BottomDockWidgetArea, self.log_view)
        self.log_view.hide()

        self.statusBar().setSizeGripEnabled(False)

    def _connect_signals(self) -> None:
        self.filter_bar.criteriaChanged.connect(signals.historyRequested)
        self.filter_bar.backRequested.connect(signals.showMainMenu)
        self.chart_view.categoryClicked.connect(self.filter_bar.set_category)

        signals.historyLoaded.connect(self.history_loaded)
        signals.initializationRequested.connect(self.request_history)
        signals.showLogs.connect(lambda: (self.log_view.show(), self.log_view.raise_()))

        signals.warning.connect(self.show_status_message)
        signals.error.connect(self.show_status_message)

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, _: object) -> None:
            if key == 'span':
                self.filter_bar.init_data()
                self.request_history()

        signals.metadataChanged.connect(metadata_changed)

    def sizeHint(self) -> QtCore.QSize:
        return QtCore.QSize(ui.Size.DefaultWidth(1.6), ui.Size.DefaultHeight(1.4))

    @QtCore.Slot()
    def request_history(self) -> None:
        """Load the history for the current filter inputs."""
        self.filter_bar.emit_criteria()

    @QtCore.Slot(object)
    def history_loaded(self, result: object) -> None:
        self.summary_widget.set_summary(result.summary)
        if not result.errors:
            self.statusBar().clearMessage()

    @QtCore.Slot(str)
    def show_status_message(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        QtCore.QTimer.singleShot(0, self.request_history)

    def closeEvent(self, event) -> None:
        """Closing the window returns to the main menu."""
        super().closeEvent(event)
        signals.showMainMenu.emit()
