"""
Exceptions raised by the forecasting engine and its services.
"""


class AkvamanasError(Exception):
    """Base exception for forecasting and training errors."""

    pass


class MissingInputError(AkvamanasError):
    """Required input is missing; the run is aborted before any work is done."""

    pass


class CorruptModelError(AkvamanasError):
    """The persisted regression model cannot be interpreted."""

    pass
