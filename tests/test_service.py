"""
Tests for the history service in PersonalExpenseTracker.core.service.

Run:
    python -m unittest tests.test_service
"""
import datetime
from decimal import Decimal

import pandas as pd

from PersonalExpenseTracker.core import service
from PersonalExpenseTracker.data import data
from PersonalExpenseTracker.data.source import MockTransactionSource, TransactionSource, empty_transactions
from PersonalExpenseTracker.settings import lib
from PersonalExpenseTracker.status import status
from PersonalExpenseTracker.ui.actions import signals
from tests.base import TODAY, BaseTestCase, capture_signal


class EmptySource(TransactionSource):
    def list_transactions(self) -> pd.DataFrame:
        return empty_transactions()


class ServiceTests(BaseTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.criteria = data.FilterCriteria(
            date_from=TODAY - datetime.timedelta(days=30),
            date_to=TODAY,
        )

    def test_default_source_is_mock(self):
        service.set_source(None)
        self.assertIsInstance(service.get_source(), MockTransactionSource)

    def test_set_source_rejects_other_types(self):
        with self.assertRaises(TypeError):
            service.set_source(object())

    def test_food_history(self):
        criteria = data.FilterCriteria(
            date_from=TODAY - datetime.timedelta(days=30),
            date_to=TODAY,
            category='Food',
        )
        result = service.load_history(criteria)

        self.assertEqual(len(result.transactions), 2)
        self.assertEqual(result.summary.totals, {'Food': Decimal('650.00')})
        self.assertEqual(result.summary.total, Decimal('650.00'))
        self.assertEqual(result.chart_points, [data.ChartPoint('Food', Decimal('650.00'))])
        self.assertEqual(result.errors, [])
        self.assertIs(result.criteria, criteria)

    def test_load_history_emits_result(self):
        with capture_signal(signals.historyLoaded) as received:
            result = service.load_history(self.criteria)

        self.assertEqual(len(received), 1)
        self.assertIs(received[0][0], result)

    def test_history_requested_runs_the_service(self):
        with capture_signal(signals.historyLoaded) as received:
            signals.historyRequested.emit(self.criteria)

        self.assertEqual(len(received), 1)
        self.assertEqual(received[0][0].summary.total, Decimal('2850.00'))

    def test_invalid_amount_is_reported_and_skipped(self):
        criteria = data.FilterCriteria(
            date_from=TODAY - datetime.timedelta(days=30),
            date_to=TODAY,
            amount_spec='abc',
        )
        result = service.load_history(criteria)
        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], status.InputFormatException)
        self.assertEqual(len(result.transactions), 5)

    def test_empty_source(self):
        service.set_source(EmptySource())
        result = service.load_history(self.criteria)
        self.assertTrue(result.transactions.empty)
        self.assertEqual(result.summary.totals, {})
        self.assertEqual(result.summary.total, Decimal('0'))
        self.assertEqual(result.chart_points, [])

    def test_amount_is_parsed_with_configured_locale(self):
        lib.settings.block_signals(True)
        try:
            lib.settings['locale'] = 'de_DE'
        finally:
            lib.settings.block_signals(False)

        criteria = data.FilterCriteria(
            date_from=TODAY - datetime.timedelta(days=30),
            date_to=TODAY,
            amount_spec='1.200,00',
        )
        result = service.load_history(criteria)
        self.assertEqual(result.errors, [])
        self.assertEqual(list(result.transactions['category']), ['Transport'])
