"""Transaction sources.

A source supplies the transaction table the filter and summary engine works on.
:class:`MockTransactionSource` regenerates a fixed sample dataset on every call;
other backends can be substituted by implementing :class:`TransactionSource`.
"""
import abc
import datetime
import logging
from decimal import Decimal
from typing import Optional

import pandas as pd

from ..settings.lib import TRANSACTION_DATA_COLUMNS

# (amount, days before today, category, payment method)
MOCK_TRANSACTIONS: list[tuple[str, int, str, str]] = [
    ('500.00', 0, 'Food', 'Cash'),
    ('1200.00', 1, 'Transport', 'Credit Card'),
    ('800.00', 3, 'Bills', 'Online'),
    ('200.00', 5, 'Snacks', 'GCash'),
    ('150.00', 2, 'Food', 'Cash'),
]


def empty_transactions() -> pd.DataFrame:
    """Return an empty transaction table with the standard columns."""
    df = pd.DataFrame(columns=TRANSACTION_DATA_COLUMNS)
    df['date'] = pd.to_datetime(df['date'])
    return df


class TransactionSource(abc.ABC):
    """Interface for anything able to list all transactions."""

    @abc.abstractmethod
    def list_transactions(self) -> pd.DataFrame:
        """Return a fresh DataFrame with :data:`TRANSACTION_DATA_COLUMNS`.

        Callers may modify the returned frame; sources must not hand out shared state.
        """
        raise NotImplementedError


class MockTransactionSource(TransactionSource):
    """Deterministic in-memory sample of five transactions dated relative to today.

    Args:
        today (datetime.date, optional): Reference day for the sample. Defaults to the
            current date at the time of each call.
    """

    def __init__(self, today: Optional[datetime.date] = None) -> None:
        self._today = today

    @property
    def today(self) -> datetime.date:
        return self._today or datetime.date.today()

    def list_transactions(self) -> pd.DataFrame:
        today = pd.Timestamp(self.today)
        records = [
            {
                'amount': Decimal(amount),
                'date': today - pd.Timedelta(days=days_ago),
                'category': category,
                'payment_method': payment_method,
            }
            for amount, days_ago, category, payment_method in MOCK_TRANSACTIONS
        ]
        df = pd.DataFrame.from_records(records, columns=TRANSACTION_DATA_COLUMNS)
        logging.debug(f'Generated {len(df)} mock transactions for {today.date()}')
        return df
