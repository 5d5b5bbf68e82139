from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from ._definitions import Lifetime
from ._exceptions import AliasConflictError, RegistrationError, ServiceNotFoundError
from ._introspection import identify


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._definitions import Definition
    from ._introspection import Token


class DefinitionRegistrar:
    """Handle returned by registrations; adds aliases for the same definition.

    Example:
      container.singleton(SqlUserRepository).alias(UserRepository, "users")

    """

    def __init__(self, registry: Registry, identifier: str) -> None:
        self._registry = registry
        self.identifier = identifier

    @property
    def definition(self) -> Definition[Any]:
        return self._registry.get(self.identifier)

    def alias(self, *tokens: Token[Any]) -> DefinitionRegistrar:
        for token in tokens:
            self._registry.alias(self.identifier, token)
        return self


class Registry:
    """Identifier to definition mapping with an alias table.

    Definitions are never removed; defining an identifier again replaces the
    previous definition in place.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, Definition[Any]] = {}
        self._aliases: dict[str, str] = {}
        self._locked: set[str] = set()
        self._classes: dict[str, Any] = {}
        self._lock = threading.RLock()

    def define(self, token: Token[Any], definition: Definition[Any]) -> DefinitionRegistrar:
        identifier = identify(token)

        with self._lock:
            self._ensure_unlocked(identifier)

            if self._aliases.pop(identifier, None) is not None:
                logger.debug("Definition for %r replaces the alias of the same name", identifier)

            previous = self._definitions.get(identifier)
            if previous is not None and previous.lifetime is Lifetime.SINGLETON and previous.resolved:
                logger.warning("Redefining resolved singleton %r; its cached instance is orphaned", identifier)

            self._definitions[identifier] = definition
            self._remember(identifier, token)

        logger.debug("Defined %r as %s", identifier, definition.lifetime.value)
        return DefinitionRegistrar(self, identifier)

    def alias(self, token: Token[Any], alias: Token[Any]) -> None:
        """Make `alias` resolve to whatever `token` resolves to.

        An alias may not shadow a concrete definition, and may not close a
        loop in the alias chain. The target does not have to exist yet.
        """
        identifier = identify(token)
        alias_id = identify(alias)

        with self._lock:
            self._ensure_unlocked(alias_id)

            if alias_id == identifier:
                msg = f"Cannot alias {identifier!r} to itself"
                raise AliasConflictError(msg)

            if alias_id in self._definitions:
                msg = f"Alias {alias_id!r} collides with an existing definition"
                raise AliasConflictError(msg)

            chain = self.chain(identifier)
            if alias_id in chain:
                msg = f"Alias {alias_id!r} would create an alias cycle: {' -> '.join([alias_id, *chain])}"
                raise AliasConflictError(msg)

            self._aliases[alias_id] = identifier
            self._remember(identifier, token)

        logger.debug("Aliased %r to %r", alias_id, identifier)

    def lock(self, *tokens: Token[Any]) -> None:
        with self._lock:
            self._locked.update(identify(token) for token in tokens)

    def chain(self, token: Token[Any]) -> list[str]:
        """Identifiers visited while following aliases from `token`, canonical last."""
        identifier = identify(token)
        seen = [identifier]

        while identifier in self._aliases:
            identifier = self._aliases[identifier]
            if identifier in seen:
                msg = f"Alias cycle detected: {' -> '.join([*seen, identifier])}"
                raise AliasConflictError(msg)
            seen.append(identifier)

        return seen

    def canonical(self, token: Token[Any]) -> str:
        return self.chain(token)[-1]

    def target(self, token: Token[Any]) -> Token[Any]:
        """The token an alias chain ends at: its class when one was seen, else the identifier."""
        identifier = self.canonical(token)
        return self._classes.get(identifier, identifier)

    def _remember(self, identifier: str, token: Token[Any]) -> None:
        if not isinstance(token, str):
            self._classes[identifier] = token

    def get(self, token: Token[Any]) -> Definition[Any]:
        identifier = self.canonical(token)
        try:
            return self._definitions[identifier]
        except KeyError:
            raise ServiceNotFoundError(identify(token)) from None

    def has(self, token: Token[Any]) -> bool:
        try:
            return self.canonical(token) in self._definitions
        except (TypeError, ValueError):
            return False

    def _ensure_unlocked(self, identifier: str) -> None:
        if identifier in self._locked:
            msg = f"Identifier {identifier!r} is locked and cannot be rebound"
            raise RegistrationError(msg)

    def __iter__(self) -> Iterator[tuple[str, Definition[Any]]]:
        return iter(list(self._definitions.items()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, token: object) -> bool:
        return self.has(token)  # type: ignore[arg-type]
