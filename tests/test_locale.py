"""
Tests for the Babel helpers in PersonalExpenseTracker.settings.locale.

Run:
    python -m unittest tests.test_locale
"""
import datetime
import unittest
from decimal import Decimal

from PersonalExpenseTracker.settings import locale


class CurrencyTests(unittest.TestCase):

    def test_currency_from_locale(self):
        self.assertEqual(locale.get_currency_from_locale('en_PH'), 'PHP')
        self.assertEqual(locale.get_currency_from_locale('en_US'), 'USD')
        self.assertEqual(locale.get_currency_from_locale('de_DE'), 'EUR')

    def test_unknown_territory_defaults_to_peso(self):
        self.assertEqual(locale.get_currency_from_locale('en'), 'PHP')
        self.assertEqual(locale.get_currency_from_locale('en_ZZ'), 'PHP')

    def test_every_listed_locale_has_a_currency(self):
        for name in locale.LOCALE_MAP:
            with self.subTest(locale=name):
                self.assertIn(locale.get_currency_from_locale(name), locale.CURRENCY_MAP.values())

    def test_format_currency_value(self):
        self.assertEqual(locale.format_currency_value(Decimal('1200'), 'en_PH'), '₱1,200.00')
        self.assertEqual(locale.format_currency_value(Decimal('650.00'), 'en_PH'), '₱650.00')
        self.assertEqual(locale.format_currency_value(Decimal('0'), 'en_PH'), '₱0.00')
        self.assertEqual(locale.format_currency_value(Decimal('1200'), 'en_US'), '$1,200.00')

    def test_format_currency_value_with_bad_locale(self):
        self.assertEqual(locale.format_currency_value(Decimal('12.5'), 'not a locale'), '12.50')

    def test_format_date_value(self):
        self.assertEqual(locale.format_date_value(datetime.date(2024, 5, 20), 'en_US'), 'May 20, 2024')


class ParseDecimalTests(unittest.TestCase):

    def test_plain_and_grouped_values(self):
        self.assertEqual(locale.parse_decimal_value('500', 'en_PH'), Decimal('500'))
        self.assertEqual(locale.parse_decimal_value(' 1,200.50 ', 'en_PH'), Decimal('1200.50'))
        self.assertEqual(locale.parse_decimal_value('1.200,50', 'de_DE'), Decimal('1200.50'))

    def test_rejects_empty_and_garbage(self):
        for text in ('', '   ', 'abc', '12abc'):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    locale.parse_decimal_value(text, 'en_PH')

    def test_rejects_exponent_and_underscore(self):
        for text in ('1e3', '1E3', '1_200', '2.5e-1'):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    locale.parse_decimal_value(text, 'en_PH')

    def test_unknown_locale_is_a_value_error(self):
        with self.assertRaises(ValueError):
            locale.parse_decimal_value('100', 'zz_ZZ')

    def test_rejects_non_finite(self):
        for text in ('nan', 'Infinity'):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    locale.parse_decimal_value(text, 'en_PH')
