"""Custom exceptions for EnvBinder."""

import re
from typing import Any, Sequence


class EnvBinderError(Exception):
    """Base exception for EnvBinder errors."""

    pass


class MissingRequiredError(EnvBinderError):
    """Raised when a required variable is absent or empty after defaulting."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Required environment variable "{name}" is empty or undefined')


class MalformedCronError(EnvBinderError):
    """Raised when a non-empty, non-falsy value is not a 5-field cron expression."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(f'Environment variable "{name}" is not a valid cron expression: "{value}"')


class PatternMismatchError(EnvBinderError):
    """Raised when a non-empty value does not match the required pattern."""

    def __init__(self, name: str, value: str, pattern: re.Pattern[str]):
        self.name = name
        self.value = value
        self.pattern = pattern
        super().__init__(
            f'Environment variable "{name}" with value "{value}" '
            f"does not match the required pattern: {pattern.pattern}"
        )


class InvalidEnumDefaultError(EnvBinderError):
    """Raised when neither the value nor the default is an allowed value."""

    def __init__(self, name: str, value: str, allowed_values: Sequence[Any]):
        """Initialize invalid enum default error.

        Args:
            name: Variable name
            value: Resolved value that was rejected
            allowed_values: Values the variable may take
        """
        self.name = name
        self.value = value
        self.allowed_values = list(allowed_values)
        allowed_display = ", ".join(str(item) for item in self.allowed_values)
        super().__init__(f'Environment variable "{name}" value "{value}" is not in allowed values: [{allowed_display}]')
