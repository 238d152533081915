"""
Errors Module - Exception types shared by the submission, mail and chat layers
"""


class PortfolioError(Exception):
    """Base error for portfolio site operations."""
    status_code = 500


class ConfigurationError(PortfolioError):
    """Required configuration is missing. Raised at startup."""


class ValidationError(PortfolioError):
    """Client-fixable input error. Raised before any side effect."""
    status_code = 400


class BadRequestError(PortfolioError):
    """Malformed or empty request to the chat relay."""
    status_code = 400


class PersistenceError(PortfolioError):
    """Writing a record (or connecting to the database) failed."""


class TransportError(PortfolioError):
    """Outbound mail transport is unconfigured or the send was rejected."""

    def __init__(self, message, recipient=None):
        super().__init__(message)
        self.recipient = recipient


class UnknownTemplateError(PortfolioError):
    """No email template is registered under the requested name."""

    def __init__(self, template_name):
        super().__init__(f"Unknown email template: {template_name}")
        self.template_name = template_name


class DispatchError(PortfolioError):
    """Notification leg of a submission failed. The record is already stored."""

    def __init__(self, message, record_id=None):
        super().__init__(message)
        self.record_id = record_id


__all__ = [
    'PortfolioError',
    'ConfigurationError',
    'ValidationError',
    'BadRequestError',
    'PersistenceError',
    'TransportError',
    'UnknownTemplateError',
    'DispatchError'
]
