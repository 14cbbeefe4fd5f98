"""Typed getters on top of the value resolution pipeline."""

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, TypeVar, Union

from .base import ValueResolver
from .exceptions import (
    InvalidEnumDefaultError,
    MalformedCronError,
    MissingRequiredError,
    PatternMismatchError,
)
from .utils import (
    Number,
    TimeUnit,
    convert_minutes,
    is_falsy,
    is_valid_cron,
    parse_date,
    parse_duration,
    parse_integer,
    parse_number,
    stringify,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class VariableSpec:
    """Describes one variable for `EnvBinder.get_multiple`."""

    name: str
    default: Any = None
    required: bool = False


class EnvBinder(ValueResolver):
    """Environment variable binder with typed getters.

    Every getter resolves the variable through `ValueResolver.resolve` and
    then converts the string. Values that cannot be converted fall back to
    the default. Only missing required values, malformed cron expressions,
    pattern mismatches and invalid enum defaults raise.

    Example:
        env = EnvBinder()
        env.add_alias("ROOT", "/srv/app")
        port = env.get_number("PORT", 3000)
        debug = env.get_bool("DEBUG")
        hosts = env.get_string_array("ALLOWED_HOSTS", ["localhost"])
        cleanup = env.get_cron("CRON_CLEANUP", "0 3 * * *")
    """

    def get_string(self, name: str, default: str = "", required: bool = False) -> str:
        return self._lookup(name, default, required)

    def get_bool(self, name: str, default: bool = False, required: bool = False) -> bool:
        """Get a boolean; any value outside the falsy set is True.

        The falsy set is `false, 0, null, undefined, off, no, none, disabled`
        and the empty string, compared case-sensitively.
        """
        value = self._fetch(name, default, required)
        if value is None:
            return default
        return not is_falsy(value)

    def get_number(self, name: str, default: Number = 0, required: bool = False) -> Number:
        """Get a number (decimal, scientific, hex, octal or binary literal).

        Args:
            name: Variable name
            default: Returned when unset, empty or not numeric
            required: Raise if the value is empty

        Returns:
            int for integral literals, float otherwise
        """
        value = self._fetch(name, default, required)
        if not value:
            return default

        parsed = parse_number(value)
        if parsed is None:
            logger.debug("Variable %s=%r is not a number, using default %r", name, value, default)
            return default
        return parsed

    def get_integer(self, name: str, default: int = 0, required: bool = False) -> int:
        """Get a base-10 integer, truncating any fractional part."""
        value = self._fetch(name, default, required)
        if not value:
            return default

        parsed = parse_integer(value)
        if parsed is None:
            logger.debug("Variable %s=%r is not an integer, using default %r", name, value, default)
            return default
        return parsed

    def get_url(
        self,
        name: str,
        trim_trailing_slash: bool = True,
        default: str = "",
        required: bool = False,
    ) -> str:
        value = self._lookup(name, default, required)
        if not value:
            return value
        return re.sub(r"/+$", "", value) if trim_trailing_slash else value

    def get_required(self, name: str) -> str:
        """Get a variable that must be set.

        Raises:
            MissingRequiredError: If the variable is not set
        """
        value = self.resolve(name, None)
        if value is None:
            raise MissingRequiredError(name)
        return value

    def get_time(
        self,
        name: str,
        unit: Union[TimeUnit, str] = TimeUnit.MINUTES,
        default: Number = 1,
        required: bool = False,
    ) -> Number:
        """Get a value expressed in minutes, converted to `unit`.

        Args:
            name: Variable name
            unit: Target unit  # (MILLISECONDS, SECONDS, MINUTES or HOURS; anything else keeps minutes)
            default: Minutes used when unset or not numeric
            required: Raise if the value is empty

        Returns:
            Value in the target unit
        """
        minutes = self.get_number(name, default, required)
        return convert_minutes(minutes, unit)

    def get_time_duration(self, name: str, default: int = 0, required: bool = False) -> int:
        """Get a duration such as `30s`, `5m`, `24h`, `7d` or `1w` in milliseconds."""
        value = self._fetch(name, default, required)
        if not value:
            return default

        parsed = parse_duration(value)
        if parsed is None:
            logger.debug("Variable %s=%r is not a duration, using default %r", name, value, default)
            return default
        return parsed

    def get_array(self, name: str, default: Optional[List[str]] = None, required: bool = False) -> List[str]:
        """Get a JSON array of strings.

        Single quotes are turned into double quotes before decoding, so
        `['a', 'b']` is accepted. Each element is stringified and rendered
        through aliases and templates.

        Args:
            name: Variable name
            default: Returned when unset, empty, not JSON or not an array
            required: Raise if the value is empty

        Returns:
            List of rendered strings
        """
        default = [] if default is None else default
        value = self._fetch(name, default, required)
        if not value:
            return default

        try:
            data = json.loads(value.replace("'", '"'))
        except json.JSONDecodeError:
            logger.debug("Variable %s=%r is not valid JSON, using default", name, value)
            return default

        if not isinstance(data, list):
            logger.debug("Variable %s=%r is not a JSON array, using default", name, value)
            return default

        return [self.render(stringify(item)) for item in data]

    def get_string_array(self, name: str, default: Optional[List[str]] = None, required: bool = False) -> List[str]:
        """Get a comma-separated list; empty entries are dropped."""
        default = [] if default is None else default
        value = self._fetch(name, default, required)
        if not value:
            return default

        items = [self.render(item) for item in value.split(",")]
        return [item for item in items if item]

    def get_object(
        self,
        name: str,
        default: Optional[Dict[str, Any]] = None,
        required: bool = False,
    ) -> Dict[str, Any]:
        """Get a JSON object; invalid JSON or a non-object falls back to default."""
        default = {} if default is None else default
        value = self._fetch(name, default, required)
        if not value:
            return default

        try:
            data = json.loads(value)
        except json.JSONDecodeError:
            logger.debug("Variable %s=%r is not valid JSON, using default", name, value)
            return default

        if not isinstance(data, dict):
            logger.debug("Variable %s=%r is not a JSON object, using default", name, value)
            return default
        return data

    def get_date(self, name: str, default: Optional[datetime] = None, required: bool = False) -> datetime:
        """Get a datetime from an ISO-8601 / RFC 2822 string or a Unix timestamp.

        Args:
            name: Variable name
            default: Returned when unset or unparsable  # (None means now, in UTC)
            required: Raise if the value is empty

        Returns:
            Parsed datetime
        """
        value = self._fetch(name, default, required)
        if default is None:
            default = datetime.now(timezone.utc)
        if not value:
            return default

        parsed = parse_date(value)
        if parsed is None:
            logger.debug("Variable %s=%r is not a date, using default", name, value)
            return default
        return parsed

    def get_cron(self, name: str, default: str = "", required: bool = False) -> Union[str, Literal[False]]:
        """Get a 5-field cron expression, or False when disabled.

        Args:
            name: Variable name
            default: Expression used when unset
            required: Raise if the value is empty

        Returns:
            The expression unchanged, or False for an empty or falsy value

        Raises:
            MalformedCronError: If the value is not a valid cron expression
        """
        value = self._lookup(name, default, required)
        if not value or is_falsy(value):
            return False

        if not is_valid_cron(value):
            raise MalformedCronError(name, value)
        return value

    def get_pattern(
        self,
        name: str,
        pattern: Union[str, re.Pattern],
        default: str = "",
        required: bool = False,
    ) -> str:
        """Get a value that must match a regular expression (`re.search`).

        Raises:
            PatternMismatchError: If a non-empty value does not match
        """
        compiled = re.compile(pattern)
        value = self._lookup(name, default, required)
        if not value:
            return default

        if not compiled.search(value):
            raise PatternMismatchError(name, value, compiled)
        return value

    def get_enum(
        self,
        name: str,
        allowed_values: Sequence[T],
        default: T = "",
        required: bool = False,
    ) -> T:
        """Get one of a fixed set of values.

        A value outside `allowed_values` falls back to `default`.

        Args:
            name: Variable name
            allowed_values: Accepted values  # (compared by equality or string form)
            default: Fallback value  # (also used as the value when unset)
            required: Raise if the value is empty

        Returns:
            The matching allowed value, or the default

        Raises:
            InvalidEnumDefaultError: If neither the value nor the default is allowed
        """
        value = self._lookup(name, "" if default is None else str(default), required)
        if not value:
            return default

        for item in allowed_values:
            if item == value or str(item) == value:
                return item

        if default not in allowed_values:
            raise InvalidEnumDefaultError(name, value, allowed_values)

        logger.debug("Variable %s=%r is not an allowed value, using default %r", name, value, default)
        return default

    def get_custom(
        self,
        name: str,
        parser: Callable[[str], T],
        default: Optional[T] = None,
        required: bool = False,
    ) -> Optional[T]:
        """Get a value converted by a caller-supplied parser.

        Any exception raised by `parser` makes the getter return `default`.
        """
        value = self._fetch(name, default, required)
        if not value:
            return default

        try:
            return parser(value)
        except Exception as e:
            logger.debug("Parser for %s failed on %r (%s), using default", name, value, e)
            return default

    def get_multiple(self, specs: Mapping[str, Union[VariableSpec, Mapping[str, Any]]]) -> Dict[str, Any]:
        """Resolve several variables at once.

        Args:
            specs: Result key -> variable spec  # (VariableSpec or dict with name/default/required)

        Returns:
            Result key -> resolved value  # (an unmet required spec yields its default)
        """
        result = {}  # Dict[str, Any] (resolved values by result key)

        for key, spec in specs.items():
            if not isinstance(spec, VariableSpec):
                spec = VariableSpec(**spec)
            try:
                result[key] = self._lookup(spec.name, spec.default, spec.required)
            except MissingRequiredError:
                logger.debug("Required variable %s is missing, using default %r", spec.name, spec.default)
                result[key] = spec.default

        return result
