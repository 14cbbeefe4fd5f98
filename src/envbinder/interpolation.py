"""Template interpolation engine for `${NAME}` references."""

import re
from typing import Mapping


class TemplateEngine:
    """Engine for `${NAME}` interpolation against an environment mapping."""

    # Non-nested ${...} with at least one character inside
    pattern = re.compile(r"\$\{([^}]+)\}")

    def __init__(self, environ: Mapping[str, str]):
        """Initialize template engine.

        Args:
            environ: Environment mapping  # (read on every substitution, never written)
        """
        self.environ = environ

    def substitute(self, value: str) -> str:
        """Replace every `${NAME}` in a string with the value of NAME.

        Unset variables are replaced with an empty string. The substitution
        is a single pass: text inserted from the environment is not scanned
        again, so a variable whose value contains `${OTHER}` is inserted
        verbatim.

        Args:
            value: String containing `${NAME}` references

        Returns:
            Interpolated string
        """
        return self.pattern.sub(self._replace_match, value)

    def _replace_match(self, match: re.Match[str]) -> str:
        value = self.environ.get(match.group(1))
        return "" if value is None else str(value)
