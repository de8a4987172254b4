"""
UI package: application signals, application setup, theming, and windows.

This package provides:

- :mod:`PersonalExpenseTracker.ui.actions` – Application-wide Qt signals.
- :mod:`PersonalExpenseTracker.ui.app` – QApplication subclass.
- :mod:`PersonalExpenseTracker.ui.main` – The main menu window and window navigation.
- :mod:`PersonalExpenseTracker.ui.history` – The transaction history window.
- :mod:`PersonalExpenseTracker.ui.trackers` – Placeholder tracker windows.
- :mod:`PersonalExpenseTracker.ui.ui` – Styling constants for fonts, sizes, and colors.
- :mod:`PersonalExpenseTracker.ui.basechart` – Chart slice model and base chart view.
- :mod:`PersonalExpenseTracker.ui.dockable_widget` – Base class for dockable widgets.
"""
