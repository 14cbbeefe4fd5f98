"""Alias registry for `$NAME`-prefixed path and URL substitution."""

import logging
import os
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AliasEntry:
    """A registered substitution rule."""

    value: str  # (already expanded through aliases registered before it)
    is_path: bool = True


class AliasRegistry:
    """Ordered mapping of alias name to substitution rule.

    Names are not validated and registering an existing name overwrites the
    previous entry. An alias value is expanded once, at registration time,
    against the aliases registered before it. Later registrations are never
    folded back into earlier values, so expansion cannot loop.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, AliasEntry] = {}  # (insertion order is expansion order)
        self._lock = threading.Lock()

    def register(self, name: str, value: str, is_path: bool = True) -> None:
        """Register (or overwrite) an alias.

        Args:
            name: Alias name, referenced as `$name`
            value: Replacement text  # (may start with a previously registered `$alias`)
            is_path: Normalize the substituted string as a filesystem path
        """
        with self._lock:
            expanded = self.expand(value)
            # Re-registration keeps the original position in the ordering
            self._entries[name] = AliasEntry(expanded, is_path)
        logger.debug("Registered alias $%s -> %r (path=%s)", name, expanded, is_path)

    def unregister(self, name: str) -> bool:
        """Remove an alias if present.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            removed = self._entries.pop(name, None) is not None
        if removed:
            logger.debug("Removed alias $%s", name)
        return removed

    def snapshot(self) -> Mapping[str, str]:
        """Read-only `name -> value` view of the registry at call time."""
        return MappingProxyType({name: entry.value for name, entry in self._entries.items()})

    def get(self, name: str) -> Optional[AliasEntry]:
        return self._entries.get(name)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def expand(self, value: Any) -> Any:
        """Substitute aliases found at the start of a string.

        Aliases are tried in registration order against the progressively
        rewritten string. When `$name` is a prefix of the string, every
        occurrence of `$name` is replaced. A token that only appears later
        in the string is left alone.

        Args:
            value: Value to expand  # (non-strings are returned unchanged)

        Returns:
            Expanded string, path-normalized if any matched alias is a path alias
        """
        if not isinstance(value, str):
            return value

        result = value
        matched = False
        normalize = False

        for name, entry in list(self._entries.items()):
            token = f"${name}"
            if result.startswith(token):
                result = result.replace(token, entry.value)
                matched = True
                normalize = normalize or entry.is_path

        # No substitution happened, nothing to normalize
        if not matched:
            return value

        return os.path.normpath(result) if normalize else result

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AliasRegistry({dict(self.snapshot())})"
