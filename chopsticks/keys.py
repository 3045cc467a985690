"""Reusable key-binding registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeyBinding(Generic[T]):
    """Mapping from one or more key tokens to a single action factory."""

    keys: tuple[str, ...]
    action: Callable[[], T]


class KeyRegistry(Generic[T]):
    """Small key-dispatch table; unbound keys dispatch to ``None``."""

    def __init__(self) -> None:
        self._actions: dict[str, Callable[[], T]] = {}

    def register(self, *bindings: KeyBinding[T]) -> KeyRegistry[T]:
        """Register bindings, overwriting earlier ones for the same key."""
        for binding in bindings:
            for key in binding.keys:
                self._actions[key] = binding.action
        return self

    def bound(self, key: str) -> bool:
        return key in self._actions

    def dispatch(self, key: str) -> T | None:
        action = self._actions.get(key)
        if action is None:
            return None
        return action()
