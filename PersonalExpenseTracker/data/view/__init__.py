"""Qt views for the PersonalExpenseTracker application.

- PieChartView: pie chart of the category totals of the filtered transactions.
"""
