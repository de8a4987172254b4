"""
PersonalExpenseTracker data package: sources, analytics, models, and views.

This package provides:

- :mod:`PersonalExpenseTracker.data.source` – The transaction source interface and the mock dataset.
- :mod:`PersonalExpenseTracker.data.data` – Filtering, per-category summaries and chart projection
  (:func:`PersonalExpenseTracker.data.data.filter_transactions`,
  :func:`PersonalExpenseTracker.data.data.summarize`,
  :func:`PersonalExpenseTracker.data.data.to_chart_points`).
- :mod:`PersonalExpenseTracker.data.model` – Qt table model for the filtered transactions.
- :mod:`PersonalExpenseTracker.data.view` – Qt views rendering the category pie chart.
"""
