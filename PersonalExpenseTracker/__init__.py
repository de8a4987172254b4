"""
PersonalExpenseTracker: desktop application for viewing, filtering and summarizing personal expenses.

This package provides:

- :mod:`PersonalExpenseTracker.core` – The history service that runs the filter and summary engine.
- :mod:`PersonalExpenseTracker.data` – The transaction source, the filter/summary API
  (:func:`PersonalExpenseTracker.data.data.filter_transactions`,
  :func:`PersonalExpenseTracker.data.data.summarize`) and the Qt models and views showing the results.
- :mod:`PersonalExpenseTracker.ui` – PySide6 windows: main menu, transaction history and tracker stubs.
- :mod:`PersonalExpenseTracker.settings` – Settings management and locale helpers.
- :mod:`PersonalExpenseTracker.log` – In-app logging with a log viewer.

Use :func:`PersonalExpenseTracker.exec_` to launch the application.
"""
import sys

from PySide6 import QtCore

# Fail on Python < 3.11
if not (sys.version_info.major == 3 and sys.version_info.minor >= 11):
    raise RuntimeError('PersonalExpenseTracker requires Python 3.11 or higher.')

__version__ = '0.1.0'
__license__ = 'GPL-3.0'
__description__ = 'PersonalExpenseTracker: desktop application for viewing and summarizing personal expenses.'

from .log import log

log.setup_logging()


def exec_() -> None:
    """Launch the PersonalExpenseTracker GUI application and enter its event loop.

    Initializes the QApplication, shows the main menu, and starts the Qt event loop.
    """
    from .ui import app
    from .ui import main
    from .ui.actions import signals
    application = app.Application(sys.argv)
    main.show()

    QtCore.QTimer.singleShot(100, signals.initializationRequested.emit)

    sys.exit(application.exec())


if __name__ == '__main__':
    exec_()
