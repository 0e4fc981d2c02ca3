"""
Exceptions shared across the package.

- ConfigError   : missing or unusable configuration (API key etc.)
- AnalysisError : a stress analysis could not produce a result; `kind` says why
"""
from enum import Enum

FAILED_MESSAGE = "Failed to analyze stress level. The API may be unavailable or the response was invalid."
EMPTY_INPUT_MESSAGE = "Please enter some text to analyze."


class ErrorKind(str, Enum):
    EMPTY_INPUT = "EmptyInput"
    ORACLE_UNAVAILABLE = "OracleUnavailable"
    MALFORMED_REPLY = "MalformedReply"
    INVALID_CLASSIFICATION = "InvalidClassification"
    MISSING_REASONING = "MissingReasoning"


class ConfigError(RuntimeError):
    """Environment configuration problem (.env, API key)."""
    pass


class AnalysisError(RuntimeError):
    """Stress analysis failed. The specific cause is kept for diagnostics."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)

    @property
    def user_message(self) -> str:
        """Single user-facing text, whatever the underlying kind."""
        if self.kind is ErrorKind.EMPTY_INPUT:
            return EMPTY_INPUT_MESSAGE
        return FAILED_MESSAGE
