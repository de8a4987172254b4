"""
Logging subsystem: handlers, models, and views for application logging.

Modules:

- :mod:`PersonalExpenseTracker.log.log` – Log handler integrating with Python logging.
- :mod:`PersonalExpenseTracker.log.model` – Table model and proxy for displaying and filtering in-memory logs.
- :mod:`PersonalExpenseTracker.log.view` – Qt views and dock widgets for rendering log messages.
"""
