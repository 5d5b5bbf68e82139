"""Capability protocols implemented by the container.

The container registers itself under each of these, so a constructor that
asks for one of them receives the container.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from ._definitions import Definition
    from ._dispatcher import DetachedCall
    from ._introspection import Token
    from ._registry import DefinitionRegistrar
    from ._resolvers import ValueResolver


@runtime_checkable
class Locator(Protocol):
    def get(self, token: Token[Any], resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> Any: ...

    def has(self, token: Token[Any]) -> bool: ...


@runtime_checkable
class Repository(Locator, Protocol):
    def definition(self, token: Token[Any]) -> Definition[Any]: ...

    def __iter__(self) -> Iterator[tuple[str, Definition[Any]]]: ...

    def __len__(self) -> int: ...


@runtime_checkable
class Registrar(Protocol):
    def singleton(self, token: Token[Any], builder: Callable[..., Any] | None = None) -> DefinitionRegistrar: ...

    def weak(self, token: Token[Any], builder: Callable[..., Any] | None = None) -> DefinitionRegistrar: ...

    def factory(self, token: Token[Any], builder: Callable[..., Any] | None = None) -> DefinitionRegistrar: ...

    def instance(self, instance: object) -> DefinitionRegistrar: ...

    def define(self, token: Token[Any], definition: Definition[Any]) -> DefinitionRegistrar: ...

    def alias(self, token: Token[Any], alias: Token[Any]) -> None: ...


@runtime_checkable
class Dispatcher(Protocol):
    def call(self, fn: Any, resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> Any: ...

    def detach(self, fn: Any, resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> DetachedCall: ...


@runtime_checkable
class Instantiator(Protocol):
    def make(self, token: Token[Any], resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> Any: ...
