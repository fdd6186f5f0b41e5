from typing import Optional


class HarnessError(Exception):
    """Base class for all harness failures."""


class ConfigError(HarnessError):
    """Raised when the harness configuration is invalid."""


class SessionError(HarnessError, RuntimeError):
    """Raised when a browser session is used before initialization or after close."""


class WaitTimeout(HarnessError):
    """A wait predicate never became true within its timeout."""

    def __init__(self, description: str, timeout_ms: int):
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out after {timeout_ms}ms waiting for: {description}")


class ElementNotFound(HarnessError):
    """A selector from the locator contract matched nothing."""

    def __init__(self, selector: str, purpose: Optional[str] = None):
        self.selector = selector
        self.purpose = purpose
        message = f"No element matches selector '{selector}'"
        if purpose:
            message += f" ({purpose})"
        super().__init__(message)


class AssertionMismatch(HarnessError, AssertionError):
    """Observed text or attribute differs from the expected literal."""

    def __init__(self, expected, actual, field: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.field = field
        where = f" for field '{field}'" if field else ""
        super().__init__(f"Mismatch{where}: expected {expected!r}, got {actual!r}")
