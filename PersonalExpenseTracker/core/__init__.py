"""
Core package for PersonalExpenseTracker.

This package includes:

- :mod:`PersonalExpenseTracker.core.service` – The history service: reads the transaction source,
  runs the filter and summary engine and emits the result to the views.
"""
