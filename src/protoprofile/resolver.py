"""Resolve mangled (C++ style) message names to registered schema types.

Profiles record message types by their generated class name, e.g.
``shop::v1::Order_Item`` for the nested schema type ``shop.v1.Order.Item``.
Namespaces map back directly, but nested types are flattened with the same
underscore that may also appear inside an identifier, so nesting boundaries
have to be discovered against the registry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from protoprofile.registry import NESTING_SEPARATOR

if TYPE_CHECKING:
    from protoprofile.registry import TypeDefinition

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE_SEPARATOR = "::"
DEFAULT_WORD_SEPARATOR = "_"


class MessageLookup(Protocol):
    """The registry capabilities the resolver needs."""

    def find_by_qualified_name(self, name: str) -> TypeDefinition | None: ...

    def is_message_type(self, name: str) -> bool: ...


def find_boundary(
    name: str,
    min_length: int,
    is_message_type: Callable[[str], bool],
    word_separator: str = DEFAULT_WORD_SEPARATOR,
) -> int:
    """Find the rightmost separator whose prefix names a message type.

    Positions at or below ``min_length`` are never examined, so the prefix is
    never empty.

    Args:
    ----
        name: Candidate name being resolved
        min_length: Lower bound for the scan
        is_message_type: Registry predicate for prefixes
        word_separator: Character used for flattened nesting

    Returns:
    -------
        Index of the separator, or 0 if there is none

    """
    pos = len(name)
    while pos > min_length:
        pos -= 1
        if name[pos] == word_separator and is_message_type(name[:pos]):
            return pos
    return 0


class NameResolver:
    """Maps mangled message names to type definitions in a registry."""

    def __init__(
        self,
        registry: MessageLookup,
        namespace_separator: str = DEFAULT_NAMESPACE_SEPARATOR,
        word_separator: str = DEFAULT_WORD_SEPARATOR,
    ) -> None:
        if not namespace_separator:
            msg = "namespace_separator must not be empty"
            raise ValueError(msg)
        if len(word_separator) != 1:
            msg = "word_separator must be a single character"
            raise ValueError(msg)
        self.registry = registry
        self.namespace_separator = namespace_separator
        self.word_separator = word_separator

    def normalize(self, mangled_name: str) -> str:
        return mangled_name.replace(self.namespace_separator, NESTING_SEPARATOR)

    def resolve(self, mangled_name: str) -> TypeDefinition | None:
        """Resolve a mangled name, returning None when nothing matches.

        A miss is logged once as a warning and is never raised.
        """
        candidate = self.normalize(mangled_name)
        descriptor = self.registry.find_by_qualified_name(candidate)
        if descriptor is not None:
            return descriptor

        min_length = 1
        while pos := find_boundary(
            candidate, min_length, self.registry.is_message_type, self.word_separator
        ):
            candidate = f"{candidate[:pos]}{NESTING_SEPARATOR}{candidate[pos + 1:]}"
            descriptor = self.registry.find_by_qualified_name(candidate)
            if descriptor is not None:
                logger.debug(f"Resolved '{mangled_name}' to {candidate}")
                return descriptor
            min_length = pos + 1

        logger.warning(f"Unknown message name '{mangled_name}'")
        return None
