"""Settings package: application configuration and locale helpers.

Modules:

- :mod:`PersonalExpenseTracker.settings.lib` – Settings schema, paths and the :class:`SettingsAPI`.
- :mod:`PersonalExpenseTracker.settings.locale` – Babel-based currency formatting and decimal parsing.
"""
