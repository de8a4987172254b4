"""
Module for parsing and formatting decimal and currency values using Babel.

"""
import datetime
import decimal
import logging
from typing import List

from babel import Locale, UnknownLocaleError, numbers
from babel.dates import format_date

DEFAULT_LOCALE: str = 'en_PH'

CURRENCY_MAP: dict[str, str] = {
    'PH': 'PHP',
    'US': 'USD',
    'GB': 'GBP',
    'DE': 'EUR',
    'FR': 'EUR',
    'IT': 'EUR',
    'ES': 'EUR',
    'JP': 'JPY',
    'CA': 'CAD',
    'AU': 'AUD',
    'IN': 'INR',
    'SG': 'SGD',
    'HU': 'HUF',
    'NL': 'EUR',
}

LOCALE_MAP: List[str] = [
    'en_PH',
    'fil_PH',
    'en_US',
    'en_GB',
    'de_DE',
    'fr_FR',
    'it_IT',
    'es_ES',
    'ja_JP',
    'en_CA',
    'en_AU',
    'en_IN',
    'en_SG',
    'hu_HU',
    'nl_NL',
]


def get_currency_from_locale(locale: str) -> str:
    """
    Retrieve the default currency code based on the locale's territory.

    Args:
        locale (str): Locale string, e.g. 'en_PH'.

    Returns:
        str: Currency code such as 'PHP'. Defaults to 'PHP' if the territory is unknown.
    """
    parts = locale.split('_')
    if len(parts) < 2:
        return 'PHP'
    country_code = parts[1]
    return CURRENCY_MAP.get(country_code, 'PHP')


def format_currency_value(value: decimal.Decimal | float, locale: str) -> str:
    """
    Format a number as a currency string based on the locale's default currency.

    The default currency is determined by the territory extracted from the locale.

    Args:
        value (Decimal | float): The numeric value to be formatted.
        locale (str): Locale string, e.g. 'en_PH'.

    Returns:
        str: The formatted currency string, e.g. '₱1,200.00'.
    """
    try:
        currency_code = get_currency_from_locale(locale)
        locale_obj = Locale.parse(locale)
        return numbers.format_currency(value, currency=currency_code, locale=locale_obj)
    except Exception as e:
        logging.debug(f'Error formatting currency: {e}')
        return f'{value:.2f}'


def format_date_value(value: datetime.date, locale: str) -> str:
    """Format a date using the locale's medium date pattern."""
    try:
        return format_date(value, format='medium', locale=Locale.parse(locale))
    except Exception as e:
        logging.debug(f'Error formatting date: {e}')
        return value.strftime('%Y-%m-%d')


def parse_decimal_value(text: str, locale: str) -> decimal.Decimal:
    """
    Parse user input into a finite Decimal according to the locale conventions.

    Group separators are accepted, so '1,200.50' parses in 'en_PH'.

    Args:
        text (str): The text to parse. Surrounding whitespace is ignored.
        locale (str): Locale string, e.g. 'en_PH'.

    Returns:
        decimal.Decimal: The parsed value.

    Raises:
        ValueError: If the text is empty, not a number, or not finite, or if the
            locale is unknown.
    """
    text = text.strip()
    if not text:
        raise ValueError('Empty value.')

    # exponents and digit underscores are not amount notation
    if any(c in text for c in 'eE_'):
        raise ValueError(f'"{text}" is not a plain decimal number.')

    try:
        locale_obj = Locale.parse(locale)
    except UnknownLocaleError as ex:
        raise ValueError(f'Unknown locale "{locale}".') from ex

    value = numbers.parse_decimal(text, locale=locale_obj)
    if not value.is_finite():
        raise ValueError(f'"{text}" is not a finite number.')
    return value
