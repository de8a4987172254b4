import enum
import logging
import re
from typing import Any

from PySide6 import QtCore

from .log import TANK_CAPACITY, TankHandler
from ..ui import ui


class Columns(enum.IntEnum):
    """Defines the column indexes for log table data."""
    Date = 0
    Module = 1
    Level = 2
    Message = 3


class Level(enum.IntEnum):
    """Maps standard log level names to their numeric values."""
    NOTSET = logging.NOTSET
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class Roles:
    """Custom model roles for specialized data."""
    LOG_LEVEL = QtCore.Qt.UserRole + 1


def get_handler():
    """Returns the TankHandler from the root logger or raises RuntimeError."""
    root_logger = logging.getLogger()
    handler = [h for h in root_logger.handlers if isinstance(h, TankHandler)]
    if not handler:
        raise RuntimeError('TankHandler not found in root logger')
    if len(handler) > 1:
        raise RuntimeError('Multiple TankHandlers found in root logger')
    return handler[0]


class LogTableModel(QtCore.QAbstractTableModel):
    """
    A model for displaying log messages fetched from a TankHandler.
    Each row includes the following fields:
        - date (str)
        - module (str)
        - level_enum (Level)
        - message (str)
    """

    re_log_pattern = re.compile(
        r'^\[(?P<date>[^\]]+)\]\s+<(?P<module>[^>]+)>\s+(?P<level>[^:]+):\s+(?P<message>.*)$',
        flags=re.DOTALL
    )

    header = ['Date', 'Module', 'Level', 'Message']

    def __init__(self, parent: Any = None, fetch_interval_ms: int = 1000):
        """
        Args:
            parent (Any, optional): Parent QObject. Defaults to None.
            fetch_interval_ms (int, optional): Interval in ms to poll the tank for new logs.
        """
        super().__init__(parent=parent)
        self._logs: list[dict[str, Any]] = []
        self._next_sequence = 0
        self._is_paused = False

        self._timer = QtCore.QTimer(self)
        self._timer.timeout.connect(self.fetch_new_logs)
        self._timer.start(fetch_interval_ms)

    @QtCore.Slot()
    def pause(self) -> None:
        """Pauses automatic fetching of new log messages."""
        self._is_paused = True

    @QtCore.Slot()
    def resume(self) -> None:
        """Resumes automatic fetching of new log messages."""
        self._is_paused = False

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._logs)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(Columns)

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole) -> Any:
        if not index.isValid() or index.row() >= len(self._logs):
            return None

        log_data = self._logs[index.row()]

        if role == QtCore.Qt.DisplayRole:
            if index.column() == Columns.Date:
                return log_data['date']
            elif index.column() == Columns.Module:
                return log_data['module']
            elif index.column() == Columns.Level:
                return log_data['level_enum'].name
            elif index.column() == Columns.Message:
                return log_data['message']

        if role in (QtCore.Qt.ToolTipRole, QtCore.Qt.StatusTipRole) and index.column() == Columns.Message:
            return log_data['message']

        if role == QtCore.Qt.ForegroundRole:
            if log_data['level_enum'] == Level.DEBUG:
                return ui.Color.SecondaryText()
            elif log_data['level_enum'] == Level.WARNING:
                return ui.Color.Yellow()
            elif log_data['level_enum'] >= Level.ERROR:
                return ui.Color.Red()

        if role == Roles.LOG_LEVEL:
            return log_data['level_enum'].value

        return None

    def headerData(self, section: int, orientation, role: int = QtCore.Qt.DisplayRole) -> Any:
        if orientation == QtCore.Qt.Horizontal and role == QtCore.Qt.DisplayRole:
            if 0 <= section < len(self.header):
                return self.header[section]
        return super().headerData(section, orientation, role)

    @QtCore.Slot()
    def fetch_new_logs(self) -> None:
        """Appends the messages logged since the last fetch, dropping the oldest rows
        once the model holds more than the tank capacity."""
        if self._is_paused:
            return

        try:
            handler = get_handler()
        except RuntimeError:
            return

        self._next_sequence, incoming = handler.get_logs_since(self._next_sequence)
        if not incoming:
            return

        incoming = incoming[-TANK_CAPACITY:]
        overflow = len(self._logs) + len(incoming) - TANK_CAPACITY
        if overflow > 0:
            self.beginRemoveRows(QtCore.QModelIndex(), 0, overflow - 1)
            del self._logs[:overflow]
            self.endRemoveRows()

        parsed_entries = [self._parse_log_message(msg) for msg in incoming]

        existing_count = len(self._logs)
        self.beginInsertRows(QtCore.QModelIndex(), existing_count, existing_count + len(parsed_entries) - 1)
        self._logs.extend(parsed_entries)
        self.endInsertRows()

    @QtCore.Slot()
    def clear_logs(self) -> None:
        """Removes all rows from the model."""
        self.beginResetModel()
        self._logs = []
        try:
            self._next_sequence = get_handler().sequence
        except RuntimeError:
            self._next_sequence = 0
        self.endResetModel()

    def _parse_log_message(self, raw_message: str) -> dict[str, Any]:
        """
        Parses a log message string using re_log_pattern. If no match, the entire
        line remains the 'message' field, level is set to NOTSET.
        """
        result: dict[str, Any] = {
            'date': '',
            'module': '',
            'level_enum': Level.NOTSET,
            'message': raw_message
        }

        match = self.re_log_pattern.match(raw_message)
        if not match:
            return result

        try:
            level_enum = Level[match.group('level').upper()]
        except KeyError:
            level_enum = Level.NOTSET

        result.update({
            'date': match.group('date'),
            'module': match.group('module'),
            'level_enum': level_enum,
            'message': match.group('message'),
        })
        return result


class LogFilterProxyModel(QtCore.QSortFilterProxyModel):
    """
    Filters out rows below a specified minimum logging level.
    """

    def __init__(self, parent: Any = None):
        super().__init__(parent)
        self._filter_level = logging.NOTSET

    def filter_level(self) -> int:
        """Return the minimum log level currently shown."""
        return self._filter_level

    def set_filter_level(self, level: int) -> None:
        """
        Sets the minimum log level for rows to be displayed.

        Args:
            level (int): A logging level integer (e.g., logging.DEBUG).
        """
        self._filter_level = level
        self.invalidateFilter()

    def filterAcceptsRow(self, source_row: int, source_parent: QtCore.QModelIndex) -> bool:
        index_level = self.sourceModel().index(source_row, Columns.Date, source_parent)
        level_value = self.sourceModel().data(index_level, Roles.LOG_LEVEL)
        if level_value is None:
            return True
        return level_value >= self._filter_level
