"""History service connecting the transaction source to the filter and summary engine.

The UI never filters or aggregates on its own: it builds a
:class:`~PersonalExpenseTracker.data.data.FilterCriteria` and requests a history load,
and this module runs the engine and broadcasts the result.
"""
import dataclasses
import logging
from typing import Optional

from ..data import data
from ..data.source import MockTransactionSource, TransactionSource

_source: Optional[TransactionSource] = None


@dataclasses.dataclass
class HistoryResult:
    """Everything the transaction history views need for one load."""
    criteria: data.FilterCriteria
    filtered: data.FilterResult
    summary: data.Summary
    chart_points: list[data.ChartPoint]

    @property
    def transactions(self):
        return self.filtered.transactions

    @property
    def errors(self):
        return self.filtered.errors


def get_source() -> TransactionSource:
    """Return the active transaction source, creating the mock source on first use."""
    global _source
    if _source is None:
        _source = MockTransactionSource()
    return _source


def set_source(source: Optional[TransactionSource]) -> None:
    """Replace the active transaction source. Passing None restores the default."""
    global _source
    if source is not None and not isinstance(source, TransactionSource):
        raise TypeError(f'Expected a TransactionSource, got {type(source)}.')
    _source = source


def load_history(criteria: data.FilterCriteria) -> HistoryResult:
    """Reload the transactions, apply the criteria and emit the result.

    Args:
        criteria (FilterCriteria): Constraints read from the filter bar.

    Returns:
        HistoryResult: The filtered table, summary and chart points.
    """
    from ..settings import lib
    from ..ui.actions import signals

    locale = lib.settings['locale'] or data.DEFAULT_LOCALE

    df = get_source().list_transactions()
    filtered = data.filter_transactions(df, criteria, locale=locale)
    summary = data.summarize(filtered.transactions)

    result = HistoryResult(
        criteria=criteria,
        filtered=filtered,
        summary=summary,
        chart_points=data.to_chart_points(summary.totals),
    )
    logging.debug(
        f'Loaded history: {len(df)} transactions, {len(filtered.transactions)} after filtering, '
        f'{len(summary.totals)} categories, total {summary.total}'
    )

    signals.historyLoaded.emit(result)
    return result
