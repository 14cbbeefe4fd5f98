"""EnvBinder - Typed environment variable access.

Resolves environment variables through path/URL aliases and `${NAME}`
templates, then converts them to numbers, booleans, lists, dicts, dates,
durations, cron expressions and enum values.
"""
# ruff: noqa: F401

from .aliases import AliasEntry, AliasRegistry
from .base import ValueResolver
from .binder import EnvBinder, VariableSpec
from .defaults import get_default_binder, load_env_file, reset_default_binder
from .exceptions import (
    EnvBinderError,
    InvalidEnumDefaultError,
    MalformedCronError,
    MissingRequiredError,
    PatternMismatchError,
)
from .interpolation import TemplateEngine
from .utils import FALSY_VALUES, TimeUnit

__version__ = "0.1.0"
