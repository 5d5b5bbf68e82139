from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

from ._exceptions import NotInstantiatableError
from ._introspection import identify, locate, not_instantiatable_reason


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ._introspection import Token
    from ._resolvers import Resolver, ValueResolver


class ClassInstantiator:
    """Builds fresh instances of concrete classes by constructor injection.

    Nothing is cached here; lifetimes belong to definitions.
    """

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver

    def make(
        self,
        token: Token[Any],
        resolvers: Iterable[ValueResolver] = (),
        overrides: Mapping[str, Any] | None = None,
    ) -> Any:
        cls = locate(token)

        reason = not_instantiatable_reason(cls)
        if reason is not None:
            raise NotInstantiatableError(identify(token), reason)

        try:
            inspect.signature(cls)
        except (TypeError, ValueError) as exc:
            msg = f"no readable constructor ({exc})"
            raise NotInstantiatableError(identify(token), msg) from exc

        args, kwargs = self._resolver.arguments(cls, resolvers, overrides)

        logger.debug("Constructing %s", cls.__qualname__)
        return cls(*args, **kwargs)
