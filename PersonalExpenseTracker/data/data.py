"""Filter and summary API for transaction analysis.

This module provides the pure functions behind the transaction history window:
filtering a transaction table by :class:`FilterCriteria`, summarizing the result
per category, and projecting the summary into chart points.
"""
import dataclasses
import datetime
import logging
from decimal import Decimal
from typing import NamedTuple, Optional

import pandas as pd

from .source import empty_transactions
from ..settings.lib import ALL_CATEGORIES, TRANSACTION_DATA_COLUMNS
from ..settings.locale import DEFAULT_LOCALE, format_currency_value, parse_decimal_value
from ..status import status

RANGE_SEPARATOR: str = '-'
NO_DATA_MESSAGE: str = 'No data to summarize.'


@dataclasses.dataclass(frozen=True)
class FilterCriteria:
    """Date range, category and amount constraints read from the filter bar.

    Attributes:
        date_from (datetime.date): Inclusive lower date bound.
        date_to (datetime.date): Inclusive upper date bound.
        category (str): A category name, or ``'All'`` to keep every category.
        amount_spec (str): Empty, a single amount, or an inclusive ``min-max`` range.
    """
    date_from: datetime.date
    date_to: datetime.date
    category: str = ALL_CATEGORIES
    amount_spec: str = ''


@dataclasses.dataclass(frozen=True)
class AmountFilter:
    """Inclusive amount bounds. An exact amount has equal bounds."""
    minimum: Decimal
    maximum: Decimal

    @property
    def is_exact(self) -> bool:
        return self.minimum == self.maximum


@dataclasses.dataclass
class FilterResult:
    """Filtered transactions plus the input errors met while reading the criteria."""
    transactions: pd.DataFrame
    errors: list[status.InputFormatException] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class Summary:
    """Per-category totals in first-seen order and their grand total."""
    totals: dict[str, Decimal] = dataclasses.field(default_factory=dict)
    total: Decimal = Decimal('0')

    @property
    def is_empty(self) -> bool:
        return not self.totals


class ChartPoint(NamedTuple):
    label: str
    value: Decimal


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _conform_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with exactly the transaction columns, datetime dates and Decimal amounts.

    Args:
        df (pd.DataFrame): Transaction table from a source.

    Returns:
        pd.DataFrame: Conformed copy of the table.
    """
    missing = [c for c in TRANSACTION_DATA_COLUMNS if c not in df.columns]
    if missing:
        logging.warning(f'Transaction data is missing columns: {missing}')

    df = df.reindex(columns=TRANSACTION_DATA_COLUMNS).copy()
    if df.empty:
        return empty_transactions()

    df['date'] = pd.to_datetime(df['date'], errors='coerce').dt.normalize()
    clean_df = df.dropna(subset=['date'])
    if len(df) != len(clean_df):
        logging.warning(f'Dropped {len(df) - len(clean_df)} transactions with invalid dates.')
    df = clean_df.copy()

    df['amount'] = df['amount'].fillna(0).map(_to_decimal).astype(object)
    df['category'] = df['category'].fillna('').astype(str)
    return df


def _filter_date_range(df: pd.DataFrame, date_from: datetime.date, date_to: datetime.date) -> pd.DataFrame:
    """Keep rows whose calendar date lies within [date_from, date_to]."""
    if df.empty:
        return df
    dates = df['date'].dt.date
    return df[(dates >= date_from) & (dates <= date_to)]


def _filter_category(df: pd.DataFrame, category: str) -> pd.DataFrame:
    """Keep rows matching category case-insensitively, unless category is 'All'."""
    if not category or category == ALL_CATEGORIES or df.empty:
        return df
    return df[df['category'].str.casefold() == category.casefold()]


def _filter_amount(df: pd.DataFrame, amount_filter: AmountFilter) -> pd.DataFrame:
    """Keep rows whose amount lies within the inclusive bounds."""
    if df.empty:
        return df
    return df[df['amount'].between(amount_filter.minimum, amount_filter.maximum)]


def parse_amount_spec(amount_spec: str, locale: str = DEFAULT_LOCALE) -> Optional[AmountFilter]:
    """Parse the amount filter text.

    Args:
        amount_spec (str): Empty, a single decimal (``'500'``), or a ``min-max`` range (``'100-500'``).
        locale (str): Locale used to parse decimals.

    Returns:
        Optional[AmountFilter]: The parsed bounds, or None when the text is empty.

    Raises:
        status.InvalidAmountRangeException: If the text contains '-' but is not two decimals.
        status.InvalidAmountValueException: If the text is not a single decimal.
    """
    text = (amount_spec or '').strip()
    if not text:
        return None

    if RANGE_SEPARATOR in text:
        parts = text.split(RANGE_SEPARATOR)
        if len(parts) != 2:
            raise status.InvalidAmountRangeException(f'Got "{text}".')
        try:
            minimum = parse_decimal_value(parts[0], locale)
            maximum = parse_decimal_value(parts[1], locale)
        except ValueError as ex:
            raise status.InvalidAmountRangeException(f'Got "{text}".') from ex
        return AmountFilter(minimum, maximum)

    try:
        value = parse_decimal_value(text, locale)
    except ValueError as ex:
        raise status.InvalidAmountValueException(f'Got "{text}".') from ex
    return AmountFilter(value, value)


def filter_transactions(
        df: pd.DataFrame,
        criteria: FilterCriteria,
        locale: str = DEFAULT_LOCALE,
) -> FilterResult:
    """Filter a transaction table by date range, category and amount.

    A malformed amount specification does not abort the filter: the input error is
    recorded in the result and the amount clause is skipped, so the rows are filtered
    by date and category only.

    Args:
        df (pd.DataFrame): Transaction table with :data:`TRANSACTION_DATA_COLUMNS`.
        criteria (FilterCriteria): The constraints to apply.
        locale (str): Locale used to parse the amount specification.

    Returns:
        FilterResult: The filtered table (never None, empty tables keep their columns)
            and any input errors.
    """
    errors: list[status.InputFormatException] = []

    df = (
        _conform_columns(df)
        .pipe(_filter_date_range, criteria.date_from, criteria.date_to)
        .pipe(_filter_category, criteria.category)
    )

    try:
        amount_filter = parse_amount_spec(criteria.amount_spec, locale)
    except status.InputFormatException as ex:
        logging.debug(f'Skipping amount filter: {ex}')
        errors.append(ex)
        amount_filter = None

    if amount_filter is not None:
        df = _filter_amount(df, amount_filter)

    if df.empty:
        return FilterResult(empty_transactions(), errors)
    return FilterResult(df.reset_index(drop=True), errors)


def summarize(df: pd.DataFrame) -> Summary:
    """Sum transaction amounts per category.

    Categories keep the order in which they first appear in ``df``. The grand total is
    the sum of the category totals.

    Args:
        df (pd.DataFrame): Filtered transaction table.

    Returns:
        Summary: Empty totals and a zero total when ``df`` has no rows.
    """
    if df.empty:
        return Summary()

    totals: dict[str, Decimal] = {}
    for category, group in df.groupby('category', sort=False):
        totals[category] = sum(group['amount'].map(_to_decimal), Decimal('0'))

    return Summary(totals=totals, total=sum(totals.values(), Decimal('0')))


def to_chart_points(totals: dict[str, Decimal]) -> list[ChartPoint]:
    """Project category totals into (label, value) chart points, keeping their order."""
    return [ChartPoint(label, value) for label, value in totals.items()]


def format_summary(summary: Summary, locale: str = DEFAULT_LOCALE) -> tuple[str, str]:
    """Build the total and per-category label texts.

    Returns:
        tuple[str, str]: ``('Total Spending: ₱650.00', 'Food: ₱650.00')``-style texts; the
            second text is :data:`NO_DATA_MESSAGE` when the summary is empty.
    """
    total_text = f'Total Spending: {format_currency_value(summary.total, locale)}'
    if summary.is_empty:
        return total_text, NO_DATA_MESSAGE

    lines = [f'{category}: {format_currency_value(value, locale)}' for category, value in summary.totals.items()]
    return total_text, '\n'.join(lines)
