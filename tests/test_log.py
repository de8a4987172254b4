# tests/test_log.py
"""
Integration tests for PersonalExpenseTracker.log
(covers the bounded TankHandler, Qt bridge, setup helpers and the log table models).

Run:
    python -m unittest tests.test_log
"""
import logging
import time
from typing import List

from PySide6.QtCore import QtMsgType

from PersonalExpenseTracker.log.log import (
    TANK_CAPACITY,
    TankHandler,
    qt_message_handler,
    set_logging_level,
    setup_logging,
)
from PersonalExpenseTracker.log.model import Level, LogFilterProxyModel, LogTableModel, Roles
from PersonalExpenseTracker.ui.actions import signals
from tests.base import BaseTestCase, capture_signal


class LogModuleTests(BaseTestCase):
    """
    Each test starts with a fresh root logger configured by
    setup_logging(enable_stream_handler=False).
    """

    def setUp(self) -> None:
        super().setUp()

        # enable logging
        logging.disable(logging.NOTSET)

        setup_logging(enable_stream_handler=False,
                      enable_qt_handler=False,
                      log_level=logging.DEBUG)

        self.root_logger = logging.getLogger()
        self.tank: TankHandler = next(
            h for h in self.root_logger.handlers if isinstance(h, TankHandler)
        )

    def test_tank_is_bounded(self):
        """
        Logging more records than the capacity keeps only the newest ones.
        """
        self.tank.clear_logs()
        n = TANK_CAPACITY + 250
        t0 = time.perf_counter()
        for i in range(n):
            logging.debug("bulk-%05d", i)
        elapsed = time.perf_counter() - t0

        self.assertLessEqual(elapsed, 2.0, f"logging {n} messages took {elapsed:.2f}s")
        self.assertEqual(len(self.tank.tank), TANK_CAPACITY)
        logs = self.tank.get_logs()
        self.assertIn(f"bulk-{n - 1:05d}", logs[-1])
        self.assertIn(f"bulk-{n - TANK_CAPACITY:05d}", logs[0])

    def test_tank_rejects_non_positive_capacity(self):
        with self.assertRaises(ValueError):
            TankHandler(capacity=0)

    def test_get_logs_since_returns_only_new_messages(self):
        start = self.tank.sequence
        logging.info("first")
        logging.info("second")

        position, logs = self.tank.get_logs_since(start)
        self.assertEqual(position, start + 2)
        self.assertEqual(len(logs), 2)
        self.assertIn("second", logs[-1])

        logging.info("third")
        position, logs = self.tank.get_logs_since(position)
        self.assertEqual(len(logs), 1)
        self.assertIn("third", logs[0])

        _, logs = self.tank.get_logs_since(position + 1)
        self.assertEqual(logs, [])

    def test_sequence_keeps_growing_after_clear(self):
        logging.info("before clear")
        position = self.tank.sequence
        self.tank.clear_logs()
        self.assertEqual(self.tank.sequence, position)
        logging.info("after clear")
        self.assertEqual(self.tank.sequence, position + 1)

    def test_set_logging_level_accepts_valid_levels(self):
        set_logging_level(logging.ERROR)
        self.assertEqual(self.root_logger.level, logging.ERROR)
        for h in self.root_logger.handlers:
            self.assertEqual(h.level, logging.ERROR)

    def test_set_logging_level_rejects_non_int(self):
        with self.assertRaises(ValueError):
            set_logging_level("INFO")  # type: ignore[arg-type]

    def test_set_logging_level_rejects_unknown(self):
        with self.assertRaises(ValueError):
            set_logging_level(1234)

    def test_tank_handler_stores_and_filters(self):
        self.tank.clear_logs()
        logging.debug("dbg message")
        logging.error("err message")
        self.assertEqual(len(self.tank.tank), 2)
        errs: List[str] = self.tank.get_logs(logging.ERROR)
        self.assertEqual(len(errs), 1)
        self.assertIn("err message", errs[0])
        self.tank.clear_logs()
        self.assertEqual(len(self.tank.tank), 0)

    def test_error_requests_log_viewer(self):
        with capture_signal(signals.showLogs) as received:
            logging.warning("not shown")
            self.assertEqual(received, [])
            logging.error("should emit signal")
        self.assertEqual(len(received), 1)

    def test_qt_message_handler_maps_to_logging(self):
        qt_message_handler(QtMsgType.QtInfoMsg, None, "Qt info")
        qt_message_handler(QtMsgType.QtWarningMsg, None, "Qt warn")
        msgs = self.tank.get_logs()
        self.assertTrue(any("Qt info" in m for m in msgs))
        self.assertTrue(any("Qt warn" in m for m in msgs))

    def test_qt_message_handler_fatal_exits(self):
        with self.assertRaises(SystemExit):
            qt_message_handler(QtMsgType.QtFatalMsg, None, "fatal")

    def test_setup_logging_installs_tank_handler_only(self):
        self.assertEqual(
            [type(h) for h in self.root_logger.handlers],
            [TankHandler],
        )


class LogModelTests(BaseTestCase):

    def setUp(self) -> None:
        super().setUp()
        logging.disable(logging.NOTSET)
        setup_logging(enable_stream_handler=False,
                      enable_qt_handler=False,
                      log_level=logging.DEBUG)
        self.model = LogTableModel(fetch_interval_ms=60_000)
        self.model.clear_logs()

    def test_fetch_parses_new_messages(self):
        logging.warning("amount looks odd")
        self.model.fetch_new_logs()

        self.assertEqual(self.model.rowCount(), 1)
        self.assertEqual(self.model.data(self.model.index(0, 2)), 'WARNING')
        self.assertEqual(self.model.data(self.model.index(0, 3)), 'amount looks odd')
        self.assertEqual(self.model.data(self.model.index(0, 0), Roles.LOG_LEVEL), Level.WARNING)

        # nothing new, nothing added
        self.model.fetch_new_logs()
        self.assertEqual(self.model.rowCount(), 1)

    def test_paused_model_does_not_fetch(self):
        self.model.pause()
        logging.info("while paused")
        self.model.fetch_new_logs()
        self.assertEqual(self.model.rowCount(), 0)

        self.model.resume()
        self.model.fetch_new_logs()
        self.assertEqual(self.model.rowCount(), 1)

    def test_unparseable_message_is_kept_whole(self):
        entry = self.model._parse_log_message('no structure here')
        self.assertEqual(entry['message'], 'no structure here')
        self.assertEqual(entry['level_enum'], Level.NOTSET)

    def test_filter_proxy_hides_lower_levels(self):
        logging.debug("debug line")
        logging.info("info line")
        logging.error("error line")
        self.model.fetch_new_logs()

        proxy = LogFilterProxyModel()
        proxy.setSourceModel(self.model)
        self.assertEqual(proxy.rowCount(), 3)

        proxy.set_filter_level(logging.INFO)
        self.assertEqual(proxy.filter_level(), logging.INFO)
        self.assertEqual(proxy.rowCount(), 2)

        proxy.set_filter_level(logging.ERROR)
        self.assertEqual(proxy.rowCount(), 1)
