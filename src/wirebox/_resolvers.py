from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ._exceptions import UnresolvableParameterError
from ._introspection import annotation_candidates, is_instantiable, parameters_of


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence

    from ._contracts import Locator
    from ._introspection import Parameter

# Returned by a value resolver that declines a parameter
UNRESOLVED: Any = inspect.Parameter.empty


@runtime_checkable
class ValueResolver(Protocol):
    def resolve(self, parameter: Parameter) -> Any: ...


class NamedValueResolver:
    """Supplies values by parameter name."""

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = dict(values)

    def resolve(self, parameter: Parameter) -> Any:
        return self._values.get(parameter.name, UNRESOLVED)


class PositionalValueResolver:
    """Supplies values by parameter position (0-based, declaration order)."""

    def __init__(self, values: Sequence[Any]) -> None:
        self._values = list(values)

    def resolve(self, parameter: Parameter) -> Any:
        if parameter.position < len(self._values):
            return self._values[parameter.position]
        return UNRESOLVED


class TypedValueResolver:
    """Supplies values by the parameter's annotated class."""

    def __init__(self, values: Mapping[type, Any]) -> None:
        self._values = dict(values)

    def resolve(self, parameter: Parameter) -> Any:
        for candidate in annotation_candidates(parameter.annotation):
            if candidate in self._values:
                return self._values[candidate]
        return UNRESOLVED


class ContainerServiceResolver:
    """Pulls parameter values out of a container.

    Resolution precedence:
    1. annotated class that is registered (or auto-wirable)
    2. name-based registration
    3. decline.
    """

    def __init__(self, container: Locator, *, autowire: bool = True) -> None:
        self._container = container
        self._autowire = autowire

    def resolve(self, parameter: Parameter) -> Any:
        for candidate in annotation_candidates(parameter.annotation):
            if self._container.has(candidate) or (self._autowire and is_instantiable(candidate)):
                return self._container.get(candidate)

        if self._container.has(parameter.name):
            return self._container.get(parameter.name)

        return UNRESOLVED


class Resolver:
    """Ordered chain of value resolvers.

    Per-call resolvers are tried before the chain; the parameter default is
    the last resort.
    """

    def __init__(self, resolvers: Iterable[ValueResolver] = ()) -> None:
        self._resolvers = list(resolvers)

    def resolve(self, parameter: Parameter, resolvers: Iterable[ValueResolver] = ()) -> Any:
        for resolver in [*resolvers, *self._resolvers]:
            value = resolver.resolve(parameter)
            if value is not UNRESOLVED:
                return value

        if parameter.has_default:
            logger.debug("Using default for parameter '%s' of %s", parameter.name, parameter.owner_name)
            return parameter.default

        raise UnresolvableParameterError(parameter)

    def arguments(
        self,
        fn: Callable[..., Any],
        resolvers: Iterable[ValueResolver] = (),
        overrides: Mapping[str, Any] | None = None,
    ) -> tuple[list[Any], dict[str, Any]]:
        """Resolve every declared parameter of `fn` into call arguments.

        `overrides` are explicit keyword values; those not matching a named
        parameter are forwarded through `**kwargs`. `*args` stays empty.
        """
        overrides = dict(overrides or {})
        overrides.pop("self", None)  # never allow passing 'self'

        chain = list(resolvers)
        if overrides:
            chain.insert(0, NamedValueResolver(overrides))

        params = parameters_of(fn)
        named = {p.name for p in params if not p.variadic}
        extras = {k: v for k, v in overrides.items() if k not in named}

        if extras and not any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params):
            owner = getattr(fn, "__qualname__", repr(fn))
            msg = f"Overrides don't match {owner} signature: unexpected {', '.join(sorted(extras))}"
            raise TypeError(msg)

        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for parameter in params:
            if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
                continue

            if parameter.kind is inspect.Parameter.VAR_KEYWORD:
                kwargs.update(extras)
                continue

            value = self.resolve(parameter, chain)
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value

        return args, kwargs
