import enum
import logging
from decimal import Decimal
from typing import Any, Optional

import pandas as pd
from PySide6 import QtCore, QtGui

from ...settings import lib
from ...settings import locale
from ...ui import ui
from ...ui.actions import signals


class Columns(enum.IntEnum):
    Amount = 0
    Date = 1
    Category = 2
    PaymentMethod = 3


HEADERS: dict[Columns, str] = {
    Columns.Amount: 'Amount',
    Columns.Date: 'Date',
    Columns.Category: 'Category',
    Columns.PaymentMethod: 'Payment Method',
}


def _current_locale() -> str:
    return lib.settings['locale'] or locale.DEFAULT_LOCALE


class TransactionsModel(QtCore.QAbstractTableModel):
    """
    TransactionsModel displays the filtered transactions as table rows.
    The model is reset every time a history load finishes. The header is shown even
    when no transactions match.
    """

    def __init__(self, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent=parent)

        self._data: list[dict[str, Any]] = []

        self._connect_signals()

    def _connect_signals(self) -> None:
        @QtCore.Slot(object)
        def history_loaded(result: object) -> None:
            self.init_data(result.transactions)

        signals.historyLoaded.connect(history_loaded)

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, _: object) -> None:
            if key not in ('locale', 'theme') or not self._data:
                return
            self.dataChanged.emit(
                self.index(0, 0),
                self.index(self.rowCount() - 1, self.columnCount() - 1),
            )

        signals.metadataChanged.connect(metadata_changed)

    @QtCore.Slot(object)
    def init_data(self, df: Optional[pd.DataFrame]) -> None:
        """Replace the rows with the records of a transaction table."""
        self.beginResetModel()
        self._data = []
        try:
            if df is None or df.empty:
                return
            self._data = df[lib.TRANSACTION_DATA_COLUMNS].to_dict('records')
        except KeyError as ex:
            logging.error(f'Failed to load transactions data: {ex}')
            self._data = []
        finally:
            self.endResetModel()

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._data)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(Columns)

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole):
        """Returns data for the specified index and role.

        The edit role carries sortable values: a float amount and an ISO date string.

        Args:
            index (QtCore.QModelIndex): The model index.
            role (int): The data role.

        Returns:
            Any: Data appropriate for the role, or None.
        """
        if not self._data or not index.isValid():
            return None
        row = index.row()
        if row < 0 or row >= self.rowCount():
            return None

        column = Columns(index.column())
        value = self._data[row][lib.TRANSACTION_DATA_COLUMNS[column]]

        if column == Columns.Amount:
            if role == QtCore.Qt.EditRole:
                return float(value)
            elif role in (QtCore.Qt.DisplayRole, QtCore.Qt.ToolTipRole):
                if isinstance(value, (Decimal, int, float)):
                    return locale.format_currency_value(value, _current_locale())
                return f'{value}'
            elif role == QtCore.Qt.FontRole:
                font, _ = ui.Font.BoldFont(ui.Size.MediumText(1.0))
                return font
            elif role == QtCore.Qt.TextAlignmentRole:
                return int(QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter)

        elif column == Columns.Date:
            if not isinstance(value, pd.Timestamp):
                return f'{value}' if role in (QtCore.Qt.DisplayRole, QtCore.Qt.EditRole) else None
            if role == QtCore.Qt.EditRole:
                return value.strftime('%Y-%m-%d')
            elif role in (QtCore.Qt.DisplayRole, QtCore.Qt.ToolTipRole):
                return locale.format_date_value(value.date(), _current_locale())
            elif role == QtCore.Qt.FontRole:
                font, _ = ui.Font.ThinFont(ui.Size.SmallText(1.0))
                return font

        elif column == Columns.Category:
            config = lib.settings.get_section('categories') or {}
            if role in (QtCore.Qt.DisplayRole, QtCore.Qt.EditRole):
                if value in config:
                    return config[value].get('display_name') or f'{value}'
                return f'{value}'
            elif role == QtCore.Qt.DecorationRole:
                if value not in config:
                    return None
                color = QtGui.QColor(config[value].get('color', ''))
                return color if color.isValid() else None
            elif role == QtCore.Qt.ToolTipRole:
                return f'{value}'

        else:
            if role in (QtCore.Qt.DisplayRole, QtCore.Qt.EditRole, QtCore.Qt.ToolTipRole):
                return f'{value}'
            elif role == QtCore.Qt.ForegroundRole:
                return ui.Color.SecondaryText()

        return None

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation,
                   role: int = QtCore.Qt.DisplayRole) -> Any:
        if role != QtCore.Qt.DisplayRole:
            return None
        if orientation == QtCore.Qt.Horizontal:
            if 0 <= section < self.columnCount():
                return HEADERS[Columns(section)]
        elif orientation == QtCore.Qt.Vertical:
            return f'{section + 1}'
        return None


class TransactionsSortFilterProxyModel(QtCore.QSortFilterProxyModel):
    """
    Sort proxy for TransactionsModel. Sorts on the edit role so amounts sort
    numerically and dates chronologically.
    """

    def __init__(self, parent=None):
        super().__init__(parent=parent)

        self.setDynamicSortFilter(True)
        self.setSortRole(QtCore.Qt.EditRole)
