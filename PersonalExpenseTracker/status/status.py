"""Status definitions and exceptions for PersonalExpenseTracker.

This module provides:
    - Status: enumeration of possible application states
    - STATUS_MESSAGE: user-facing messages for each status
    - get_message: retrieve the message for a status
    - BaseStatusException: base exception carrying a Status
    - Specific exceptions (e.g., InvalidAmountRangeException) for error handling in services
"""
import enum
import logging
from typing import Dict


class Status(enum.StrEnum):
    """Enumeration of application status codes."""
    UnknownStatus = enum.auto()
    Okay = enum.auto()

    # Config status
    SettingsNotFound = enum.auto()
    SettingsInvalid = enum.auto()

    # Filter input status
    InputFormatInvalid = enum.auto()
    AmountRangeInvalid = enum.auto()
    AmountValueInvalid = enum.auto()


STATUS_MESSAGE: Dict[Status, str] = {
    Status.UnknownStatus: 'Unknown status. Please check the settings.',
    Status.Okay: 'Everything is okay.',

    Status.SettingsNotFound: 'Could not find the settings file.',
    Status.SettingsInvalid: 'The settings file seems to be incomplete, or contains invalid values.',

    Status.InputFormatInvalid: 'Invalid input format.',
    Status.AmountRangeInvalid: 'Invalid amount range format. Use min-max, e.g. 100-500.',
    Status.AmountValueInvalid: 'Invalid amount value.',
}


def get_message(status: Status) -> str:
    """
    Get the message for a given status.

    Args:
        status (Status): The status enum.

    Returns:
        str: The message associated with the status.
    """
    return STATUS_MESSAGE.get(status, 'Unknown status')


class BaseStatusException(Exception):
    """Base exception for status-based errors in PersonalExpenseTracker.

    Attributes:
        status (Status): Status code associated with this error.
        status_message (str): User-facing message for the status.
        log_level (int): Level the exception is logged at when raised.

    Args:
        message (str): Optional additional context for the error.
    """
    status = Status.UnknownStatus
    log_level = logging.ERROR

    def __init__(self, message: str = None):
        self.status_message = get_message(self.status)
        exception_message = f'{self.status_message} {message}' if message else self.status_message
        super().__init__(exception_message)

        logging.log(self.log_level, exception_message)

        from ..ui.actions import signals
        if self.log_level >= logging.ERROR:
            signals.error.emit(exception_message)
        else:
            signals.warning.emit(exception_message)


class UnknownException(BaseStatusException):
    """Exception for an unknown error during status processing."""
    pass


class SettingsNotFoundException(BaseStatusException):
    """Raised when the settings file cannot be found."""
    status = Status.SettingsNotFound


class SettingsInvalidException(BaseStatusException):
    """Raised when the settings file fails to parse or validate."""
    status = Status.SettingsInvalid


class InputFormatException(BaseStatusException):
    """Raised when filter input text cannot be parsed.

    Input format errors are never fatal: they are reported as warnings and the
    offending filter clause is dropped.
    """
    status = Status.InputFormatInvalid
    log_level = logging.WARNING


class InvalidAmountRangeException(InputFormatException):
    """Raised when a ``min-max`` amount range cannot be parsed."""
    status = Status.AmountRangeInvalid


class InvalidAmountValueException(InputFormatException):
    """Raised when a single amount value cannot be parsed."""
    status = Status.AmountValueInvalid
