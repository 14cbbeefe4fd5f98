"""Value resolution pipeline shared by all typed getters."""

import os
import re
from typing import Any, Mapping, Optional

from .aliases import AliasRegistry
from .exceptions import MissingRequiredError
from .interpolation import TemplateEngine

DEFAULT_MODE_VARIABLE = "APP_ENV"
DEFAULT_ENVIRONMENT = "development"

QUOTE_PATTERN = re.compile(r'^"|"$')


def is_empty(value: Any) -> bool:
    """Check for None, an empty string or an empty list/dict."""
    if value is None:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


class ValueResolver:
    """Resolve raw environment strings through aliases and templates.

    A resolver reads the environment on every call and keeps no derived
    state besides its alias registry.

    Example:
        resolver.add_alias("ROOT", "/app")
        # CONFIG_PATH="$ROOT/config/../settings.json", PORT=3000
        resolver.resolve("CONFIG_PATH")  # "/app/settings.json"
        # API_URL="http://localhost:${PORT}/api"
        resolver.resolve("API_URL")  # "http://localhost:3000/api"
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        mode_variable: str = DEFAULT_MODE_VARIABLE,
        aliases: Optional[AliasRegistry] = None,
    ):
        """Initialize value resolver.

        Args:
            environ: Environment mapping  # (None reads the live os.environ)
            mode_variable: Variable holding the current environment name
            aliases: Alias registry to use  # (shared between resolvers if passed in)
        """
        self.environ = os.environ if environ is None else environ
        self.mode_variable = mode_variable
        self.alias_registry = aliases if aliases is not None else AliasRegistry()

    @property
    def templates(self) -> TemplateEngine:
        return TemplateEngine(self.environ)

    @property
    def aliases(self) -> Mapping[str, str]:
        """Registered aliases as a read-only `name -> value` mapping."""
        return self.alias_registry.snapshot()

    def add_alias(self, name: str, value: str, is_path: bool = True) -> None:
        """Register an alias usable as a `$name` prefix in values.

        Args:
            name: Alias name
            value: Replacement  # (may itself start with an earlier alias)
            is_path: Normalize substituted values as filesystem paths  # (False for URLs)
        """
        self.alias_registry.register(name, value, is_path)

    def remove_alias(self, name: str) -> bool:
        return self.alias_registry.unregister(name)

    def resolve(self, name: str, default: Any = None) -> Any:
        """Resolve a variable through the full substitution pipeline.

        Steps:
            1. Read the raw value, falling back to `default` when unset.
            2. Return non-string values untouched.
            3. Strip a leading and a trailing double quote.
            4. Expand aliases, then `${NAME}` templates, once each.
            5. Strip surrounding whitespace.

        Args:
            name: Variable name
            default: Value used when the variable is unset

        Returns:
            Resolved string, or the non-string default as-is
        """
        value = self.environ.get(name)
        if value is None:
            value = default

        if not isinstance(value, str):
            return value

        return self.render(self._unquote(value))

    def render(self, value: str) -> str:
        """Apply alias expansion and template substitution to a string.

        Args:
            value: Raw string  # (e.g., "$ROOT/logs/${APP_NAME}.log")

        Returns:
            Rendered, whitespace-stripped string
        """
        # Strip first so an alias token right after leading spaces still matches
        expanded = self.alias_registry.expand(value.strip())
        return self.templates.substitute(expanded).strip()

    def has(self, name: str) -> bool:
        """Check that a variable resolves to a non-empty string."""
        value = self.resolve(name, "")
        return isinstance(value, str) and value != ""

    def environment(self) -> str:
        """Return the current environment name (`development` when unset)."""
        return self.resolve(self.mode_variable, DEFAULT_ENVIRONMENT)

    def is_env(self, mode: str) -> bool:
        return self.environment() == mode

    def is_production(self) -> bool:
        return self.is_env("production")

    def is_dev(self) -> bool:
        return self.is_env("development")

    def _lookup(self, name: str, default: Any = None, required: bool = False) -> Any:
        """Resolve a variable and enforce the `required` flag.

        Raises:
            MissingRequiredError: If required and the resolved value is empty
        """
        value = self.resolve(name, default)
        if required and is_empty(value):
            raise MissingRequiredError(name)
        return value

    def _fetch(self, name: str, default: Any = None, required: bool = False) -> Any:
        """Resolve a variable without substituting the default.

        Getters that convert the resolved string apply `default` themselves,
        but a non-empty default still satisfies the `required` flag.

        Raises:
            MissingRequiredError: If required and both the value and the default are empty
        """
        value = self.resolve(name, None)
        if required and is_empty(value) and is_empty(default):
            raise MissingRequiredError(name)
        return value

    @staticmethod
    def _unquote(value: str) -> str:
        # Double quotes only; single-quoted values keep their quotes
        return QUOTE_PATTERN.sub("", value)
