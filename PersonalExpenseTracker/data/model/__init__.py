"""Qt table models for the PersonalExpenseTracker application.

This subpackage provides the table model (TransactionsModel) and sort proxy
(TransactionsSortFilterProxyModel) showing the filtered transactions.
"""
