"""Macro declaration and lookup for the man page dispatcher.

Handlers declare the macro names they implement with the ``@macro``
decorator, which records a lightweight :class:`MacroDefinition` on the
callable. :class:`MacroRegistry` collects those declarations from a module
and maps every macro name to a bound :class:`MacroRule`, tagged with the
:class:`MacroKind` of operation it performs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from functools import cache
from typing import TYPE_CHECKING, Any, cast


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .converter import PageConverter


class MacroKind(Enum):
    """Closed set of operations a macro can perform."""

    TOPIC = "topic"
    """Document start (``.TH``): header emission and topic heading."""

    HEADING = "heading"
    """Section and subsection headings."""

    FONT = "font"
    """Single-font macros applied to one line of text."""

    ALTERNATING_FONT = "alternating-font"
    """Two-font macros alternating per argument."""

    PARAGRAPH = "paragraph"
    """Plain paragraph breaks."""

    INDENTED_PARAGRAPH = "indented-paragraph"
    """Hanging, tagged, and indented paragraphs."""

    PREFORMATTED = "preformatted"
    """Example and no-fill regions."""

    INDENT = "indent"
    """Relative insets and indentation wrappers."""

    SYNOPSIS = "synopsis"
    """Command synopsis paragraphs."""

    LINK = "link"
    """Mail and URL hyperlinks."""

    SPACING = "spacing"
    """Line breaks and vertical space."""


MacroHandler = Callable[["PageConverter", str, str], None]


@dataclass(frozen=True)
class MacroRule:
    """Concrete handler registered for one or more macro names."""

    names: tuple[str, ...]
    kind: MacroKind
    name: str
    handler: MacroHandler
    requires_topic: bool = True


@dataclass(frozen=True)
class MacroDefinition:
    """Descriptor installed on handler callables by the decorator."""

    names: tuple[str, ...]
    kind: MacroKind
    requires_topic: bool = True
    name: str | None = None

    def bind(self, handler: MacroHandler) -> MacroRule:
        """Create a concrete rule bound to the callable."""
        name = self.name or getattr(handler, "__name__", handler.__class__.__name__)
        return MacroRule(
            names=self.names,
            kind=self.kind,
            name=name,
            handler=handler,
            requires_topic=self.requires_topic,
        )


def macro(
    *names: str,
    kind: MacroKind,
    requires_topic: bool = True,
    name: str | None = None,
) -> Callable[[MacroHandler], MacroHandler]:
    """Decorator used to register macro handlers."""
    if not names:
        msg = "At least one macro name is required"
        raise ValueError(msg)
    definition = MacroDefinition(
        names=tuple(names), kind=kind, requires_topic=requires_topic, name=name
    )

    def decorator(handler: MacroHandler) -> MacroHandler:
        cast(Any, handler).__macro_rule__ = definition
        return handler

    return decorator


class MacroRegistry:
    """Mapping from macro name to the rule implementing it."""

    def __init__(self, rules: Iterable[MacroRule] = ()) -> None:
        self._rules: dict[str, MacroRule] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: MacroRule) -> None:
        """Register a rule for each of its macro names."""
        for macro_name in rule.names:
            existing = self._rules.get(macro_name)
            if existing is not None and existing is not rule:
                msg = (
                    f"Macro '{macro_name}' is already handled by '{existing.name}', "
                    f"cannot register '{rule.name}'"
                )
                raise ValueError(msg)
            self._rules[macro_name] = rule

    def register_handler(self, handler: MacroHandler) -> None:
        """Register a standalone callable decorated with ``@macro``."""
        definition = getattr(handler, "__macro_rule__", None)
        if not isinstance(definition, MacroDefinition):
            msg = "Handler must be decorated with @macro"
            raise TypeError(msg)
        self.register(definition.bind(handler))

    def collect_from(self, owner: Any) -> None:
        """Collect decorated callables from an object or module."""
        for attribute in dir(owner):
            handler = getattr(owner, attribute)
            definition = getattr(handler, "__macro_rule__", None)
            if isinstance(definition, MacroDefinition):
                self.register(definition.bind(handler))

    def lookup(self, macro_name: str) -> MacroRule | None:
        """Return the rule for ``macro_name`` or ``None`` when unsupported."""
        return self._rules.get(macro_name)

    def __contains__(self, macro_name: object) -> bool:
        return macro_name in self._rules

    def names(self) -> list[str]:
        """Return every supported macro name, sorted."""
        return sorted(self._rules)

    def kinds(self) -> set[MacroKind]:
        """Return the operation kinds covered by the registered rules."""
        return {rule.kind for rule in self._rules.values()}

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registered macros."""
        return [
            {
                "macro": macro_name,
                "kind": rule.kind.value,
                "handler": rule.name,
                "requires_topic": rule.requires_topic,
            }
            for macro_name, rule in sorted(self._rules.items())
        ]


@cache
def default_registry() -> MacroRegistry:
    """Return the registry holding every built-in macro handler."""
    from . import macros

    registry = MacroRegistry()
    registry.collect_from(macros)
    return registry


__all__ = [
    "MacroDefinition",
    "MacroHandler",
    "MacroKind",
    "MacroRegistry",
    "MacroRule",
    "default_registry",
    "macro",
]
