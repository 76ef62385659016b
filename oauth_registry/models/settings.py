"""Opaque settings bags attached to a registered client.

ClientSettings and TokenSettings are immutable name -> value mappings. The
registry never interprets individual option names; it only copies, compares
and serializes them. Both are built through SettingsBuilder:

    ClientSettings.builder().setting("require-proof-key", True).build()
    ClientSettings.with_settings(existing.settings).build()   # deep copy

Nothing handed out by a bag aliases its contents: get_setting() and
to_dict() return deep copies, and .settings is a read-only view.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

S = TypeVar("S", bound="AbstractSettings")


def _freeze(value: Any) -> Any:
    # Hashable canonical form so settings holding lists/dicts can still be hashed
    if isinstance(value, Mapping):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    return value


class AbstractSettings:
    __slots__ = ("_settings",)

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        self._settings: dict[str, Any] = copy.deepcopy(dict(settings or {}))

    @property
    def settings(self) -> Mapping[str, Any]:
        """Read-only view of all configured options."""
        return MappingProxyType(self._settings)

    def get_setting(self, name: str, default: Any = None) -> Any:
        """Return a copy of one option; nested values can't be edited in place."""
        if not name:
            raise ValueError("name cannot be empty")
        return copy.deepcopy(self._settings.get(name, default))

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of all options, detached from this instance."""
        return copy.deepcopy(self._settings)

    @classmethod
    def builder(cls: type[S]) -> SettingsBuilder[S]:
        return SettingsBuilder(cls)

    @classmethod
    def with_settings(cls: type[S], settings: Mapping[str, Any]) -> SettingsBuilder[S]:
        if settings is None:
            raise ValueError("settings cannot be None")
        return SettingsBuilder(cls, settings)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self._settings == other._settings  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, _freeze(self._settings)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(settings={self._settings!r})"

    def __getstate__(self) -> dict[str, Any]:
        return {"settings": self._settings}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self._settings = state["settings"]


class ClientSettings(AbstractSettings):
    """Client-level configuration options."""

    __slots__ = ()


class TokenSettings(AbstractSettings):
    """Token-related configuration options."""

    __slots__ = ()


class SettingsBuilder(Generic[S]):
    def __init__(
        self, settings_cls: type[S], settings: Mapping[str, Any] | None = None
    ) -> None:
        self._settings_cls = settings_cls
        self._settings: dict[str, Any] = copy.deepcopy(dict(settings or {}))

    def setting(self, name: str, value: Any) -> SettingsBuilder[S]:
        if not name:
            raise ValueError("name cannot be empty")
        self._settings[name] = value
        return self

    def settings(
        self, settings_consumer: Callable[[dict[str, Any]], None]
    ) -> SettingsBuilder[S]:
        """Hand the live option dict to a callback that may add, replace or remove."""
        settings_consumer(self._settings)
        return self

    def build(self) -> S:
        return self._settings_cls(self._settings)
