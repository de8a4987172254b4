"""Unittest base class for creating a clean test environment."""
import datetime
import logging
import os
import shutil
import tempfile
import unittest
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from PySide6 import QtWidgets, QtCore

from PersonalExpenseTracker.core import service
from PersonalExpenseTracker.data.source import MockTransactionSource
from PersonalExpenseTracker.settings import lib

TODAY = datetime.date(2024, 5, 20)


@contextmanager
def mute_ui_signals():
    from PersonalExpenseTracker.ui.actions import signals
    blocker = QtCore.QSignalBlocker(signals)  # blocks every signal in `signals`
    try:
        yield
    finally:
        del blocker


@contextmanager
def capture_signal(signal):
    """Collect the arguments of every emission of ``signal`` into a list."""
    received = []

    def _slot(*args) -> None:
        received.append(args)

    signal.connect(_slot)
    try:
        yield received
    finally:
        signal.disconnect(_slot)


class BaseTestCase(unittest.TestCase):
    """Base test case that sets up and tears down a temporary config directory."""

    config_paths: lib.ConfigPaths
    backup_dir: Optional[str]

    def setUp(self) -> None:
        """Set up a clean config directory and reinitialize the settings and data source."""
        # Ensure headless Qt
        if 'QT_QPA_PLATFORM' not in os.environ:
            os.environ['QT_QPA_PLATFORM'] = 'offscreen'
            logging.debug('QT_QPA_PLATFORM set to offscreen for headless testing.')

        # Ensure a QApplication is available
        if not QtWidgets.QApplication.instance():
            QtWidgets.QApplication([])  # type: ignore
            logging.debug('QtWidgets.QApplication initialized for tests.')

        # Prepare config paths
        self.config_paths = lib.ConfigPaths()
        self.backup_dir = None
        config_dir: Path = self.config_paths.config_dir

        # Backup and clear the existing config directory
        if config_dir.exists():
            self.backup_dir = tempfile.mkdtemp(prefix='personalexpensetracker_test_')
            logging.debug(f'Created backup directory at {self.backup_dir}')

            shutil.copytree(config_dir, self.backup_dir, dirs_exist_ok=True)
            logging.debug(f'Backed up config directory from {config_dir} to {self.backup_dir}')

            shutil.rmtree(config_dir)
            logging.debug(f'Removed original config directory {config_dir}')

        # Reinitialize settings API
        lib.settings = lib.SettingsAPI()
        logging.debug('SettingsAPI reinitialized.')

        # Use a fixed reference day for the sample data
        service.set_source(MockTransactionSource(today=TODAY))

    def tearDown(self) -> None:
        """Tear down the test config and restore any original config directory."""
        service.set_source(None)

        if self.backup_dir and os.path.isdir(self.backup_dir):
            config_dir: Path = self.config_paths.config_dir

            if config_dir.exists():
                shutil.rmtree(config_dir)
                logging.debug(f'Removed test config directory {config_dir}')

            shutil.copytree(self.backup_dir, config_dir, dirs_exist_ok=True)
            logging.debug(f'Restored config directory from {self.backup_dir} to {config_dir}')

            shutil.rmtree(self.backup_dir)
            logging.debug(f'Removed backup directory {self.backup_dir}')
