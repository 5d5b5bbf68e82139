from __future__ import annotations

import copy
import functools
import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._contracts import Dispatcher, Instantiator, Locator, Registrar, Repository
from ._definitions import (
    Definition,
    FactoryDefinition,
    InstanceDefinition,
    SingletonDefinition,
    WeakSingletonDefinition,
)
from ._dispatcher import CallDispatcher, DetachedCall
from ._exceptions import (
    CircularDependencyError,
    RegistrationError,
    ResolutionError,
    ServiceNotFoundError,
)
from ._instantiator import ClassInstantiator
from ._introspection import identify, locate, not_instantiatable_reason
from ._registry import DefinitionRegistrar, Registry
from ._resolvers import ContainerServiceResolver, Resolver


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from ._introspection import Token
    from ._resolvers import ValueResolver

T = TypeVar("T")


class Container:
    """Dependency injection container.

    - register singletons, weak singletons, factories or pre-built instances
    - resolve with constructor injection (auto-wiring for concrete classes)
    - call any callable with injected arguments
    - optional parent container, consulted first.

    Example:
      container = Container()
      container.singleton(UserRepository, SqlUserRepository).alias("users")
      service = container.get(UserService)

    """

    def __init__(self, parent: Container | None = None, *, autowire: bool = True) -> None:
        self._parent = parent
        self._autowire = autowire
        self._resolving = threading.local()

        self._resolver = Resolver([ContainerServiceResolver(self, autowire=autowire)])
        self._definitions = Registry()
        self._instantiator = ClassInstantiator(self._resolver)
        self._dispatcher = CallDispatcher(self, self._resolver)

        self._register_self()

    @property
    def parent(self) -> Container | None:
        return self._parent

    def singleton(self, token: Token[Any], builder: Callable[..., Any] | None = None) -> DefinitionRegistrar:
        """Register a service built once, on first resolution.

        `builder` may be any callable; its parameters are injected. Without a
        builder, `token` itself is constructed.
        """
        return self.define(token, SingletonDefinition(self._builder(token, builder)))

    def weak(self, token: Token[Any], builder: Callable[..., Any] | None = None) -> DefinitionRegistrar:
        """Register a service that is reused only while something else holds it."""
        return self.define(token, WeakSingletonDefinition(self._builder(token, builder)))

    def factory(self, token: Token[Any], builder: Callable[..., Any] | None = None) -> DefinitionRegistrar:
        """Register a service built anew on every resolution."""
        return self.define(token, FactoryDefinition(self._builder(token, builder)))

    def instance(self, instance: object) -> DefinitionRegistrar:
        """Register a pre-built instance under its own class."""
        return self.define(type(instance), InstanceDefinition(instance))

    def define(self, token: Token[Any], definition: Definition[Any]) -> DefinitionRegistrar:
        return self._definitions.define(token, definition)

    def definition(self, token: Token[Any]) -> Definition[Any]:
        return self._definitions.get(token)

    def alias(self, token: Token[Any], alias: Token[Any]) -> None:
        self._definitions.alias(token, alias)

    @overload
    def get(self, token: type[T], resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> T: ...

    @overload
    def get(self, token: str, resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> Any: ...

    def get(self, token: Token[T], resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> Any:
        """Resolve the token to an instance.

        - If the parent container knows the token: the parent resolves it.
        - If a definition exists: its lifetime decides.
        - Otherwise a concrete class is auto-wired.
        `resolvers` and `overrides` only apply to auto-wiring.
        """
        if self._parent is not None and self._parent.has(token):
            logger.debug("Delegating %r to the parent container", token)
            return self._parent.get(token)

        identifier = self._definitions.canonical(token)

        with self._guard(identifier):
            if self._definitions.has(identifier):
                return self._definitions.get(identifier).resolve()

            if not self._autowire:
                raise ServiceNotFoundError(identifier)

            if identifier != identify(token):
                # unregistered alias target: auto-wire what the alias points at
                token = self._definitions.target(identifier)

            return self._instantiator.make(token, resolvers, overrides)

    def has(self, token: Token[Any]) -> bool:
        return (self._parent is not None and self._parent.has(token)) or self._definitions.has(token)

    @overload
    def make(self, token: type[T], resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> T: ...

    @overload
    def make(self, token: str, resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> Any: ...

    def make(self, token: Token[T], resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> Any:
        """Construct a brand-new instance, bypassing any registered lifetime."""
        with self._guard(identify(token)):
            return self._instantiator.make(token, resolvers, overrides)

    def call(self, fn: Any, resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> Any:
        """Invoke `fn` with injected arguments and return its result."""
        return self._dispatcher.call(fn, resolvers, overrides)

    def detach(self, fn: Any, resolvers: Iterable[ValueResolver] = (), /, **overrides: Any) -> DetachedCall:
        """Return a zero-argument callable that performs `call(fn, ...)` later."""
        return self._dispatcher.detach(fn, resolvers, overrides)

    def create_child(self) -> Container:
        """Create a container that defers to this one for everything it knows."""
        return type(self)(self, autowire=self._autowire)

    def _builder(self, token: Token[Any], builder: Callable[..., Any] | None) -> Callable[[], Any]:
        if builder is not None:
            return self.detach(builder)

        try:
            cls = locate(token)
        except ServiceNotFoundError as exc:
            msg = f"Cannot register {token!r} without a builder: it does not name a class"
            raise RegistrationError(msg) from exc

        reason = not_instantiatable_reason(cls)
        if reason is not None:
            msg = f"Cannot register {identify(token)!r} without a builder: {reason}"
            raise RegistrationError(msg)

        return functools.partial(self._instantiator.make, cls)

    @contextmanager
    def _guard(self, identifier: str) -> Iterator[None]:
        stack: list[str] = self._resolution_stack()
        if identifier in stack:
            raise CircularDependencyError([*stack, identifier])

        stack.append(identifier)
        try:
            yield
        except ResolutionError as exc:
            exc.trail.append(identifier)
            raise
        finally:
            stack.pop()

    def _resolution_stack(self) -> list[str]:
        try:
            return self._resolving.stack
        except AttributeError:
            self._resolving.stack = []
            return self._resolving.stack

    def _register_self(self) -> None:
        capabilities: list[Any] = [Repository, Locator, Registrar, Dispatcher, Instantiator]
        if type(self) is not Container:
            capabilities.append(Container)

        self.instance(self).alias(*capabilities)
        self._definitions.lock(type(self), *capabilities)

    def __iter__(self) -> Iterator[tuple[str, Definition[Any]]]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, token: object) -> bool:
        return self.has(token)  # type: ignore[arg-type]

    def __copy__(self) -> Container:
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._dispatcher = copy.copy(self._dispatcher)
        clone._resolving = threading.local()
        return clone
