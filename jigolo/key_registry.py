"""Per-mode key tables for the session state machine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """Key tokens that all trigger the same session action."""

    combos: tuple[str, ...]
    handler: Callable[[], None]


class KeyComboRegistry:
    """Exact-token lookup from a decoded key to its session action."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Bind each token in ``binding``; a later binding replaces an earlier one."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> bool:
        """Run the action for ``key``.

        Returns ``False`` for unbound tokens so text-input modes can treat
        them as typed characters.
        """
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True
