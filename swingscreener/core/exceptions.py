"""Core exception hierarchy for the swing screener.

This module defines the complete exception hierarchy used throughout the
screener for error handling and exception propagation.
"""


class ScreenerError(Exception):
    """Base exception class for all screener errors.

    All screener-specific exceptions inherit from this class,
    allowing callers to catch all framework errors with a single except clause.
    """


class ConfigError(ScreenerError):
    """Configuration-related errors.

    Raised when screening criteria or settings are structurally invalid,
    a preset name is unknown, or a configuration file fails validation.
    """


class DataError(ScreenerError):
    """Data pipeline and processing errors.

    Base class for failures in fetching or validating price history and
    fundamental data.
    """


class DataUnavailable(DataError):
    """Upstream data could not be fetched or was malformed.

    The symbol is excluded from batch results; the batch continues.

    Attributes:
        symbol: Symbol whose data was unavailable.
        reason: Detailed reason for the failure.
    """

    def __init__(self, symbol: str, reason: str):
        """Initialize DataUnavailable with symbol and reason details.

        Args:
            symbol: Trading symbol (e.g., "TCS", "RELIANCE").
            reason: Description of why the data was unavailable.
        """
        super().__init__(f"[{symbol}] Data unavailable: {reason}")
        self.symbol = symbol
        self.reason = reason


class InsufficientHistory(DataError):
    """Fewer bars than the minimum required for technical analysis.

    Screening turns this into a non-passing result rather than an error.

    Attributes:
        symbol: Symbol with the short history.
        have: Number of bars available.
        need: Minimum number of bars required.
    """

    def __init__(self, symbol: str, have: int, need: int):
        super().__init__(f"[{symbol}] Insufficient history: have {have} bars, need {need}")
        self.symbol = symbol
        self.have = have
        self.need = need


class ComputationError(ScreenerError):
    """Unexpected numeric failure while computing indicators or scores.

    Caught at the batch boundary, logged and treated like DataUnavailable.

    Attributes:
        symbol: Symbol being processed.
        reason: Specific details about the failure.
    """

    def __init__(self, symbol: str, reason: str):
        super().__init__(f"[{symbol}] Computation error: {reason}")
        self.symbol = symbol
        self.reason = reason
