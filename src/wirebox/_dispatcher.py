from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._exceptions import ResolutionError


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from ._contracts import Locator
    from ._resolvers import Resolver, ValueResolver


class CallDispatcher:
    """Invokes callables with injected arguments.

    Accepted targets:
    - any callable (function, bound method, class, invokable object)
    - a service identifier whose service is callable
    - a `(token, "method")` pair, the method looked up on the resolved service.
    """

    def __init__(self, container: Locator, resolver: Resolver) -> None:
        self._container = container
        self._resolver = resolver

    def call(
        self,
        fn: Any,
        resolvers: Iterable[ValueResolver] = (),
        overrides: Mapping[str, Any] | None = None,
    ) -> Any:
        target = self._target(fn)
        args, kwargs = self._resolver.arguments(target, resolvers, overrides)
        return target(*args, **kwargs)

    def detach(
        self,
        fn: Any,
        resolvers: Iterable[ValueResolver] = (),
        overrides: Mapping[str, Any] | None = None,
    ) -> DetachedCall:
        return DetachedCall(self, fn, resolvers, overrides)

    def _target(self, fn: Any) -> Callable[..., Any]:
        if isinstance(fn, tuple):
            token, method = fn
            return getattr(self._container.get(token), method)

        if isinstance(fn, str):
            service = self._container.get(fn)
            if not callable(service):
                msg = f"Service {fn!r} is not callable"
                raise ResolutionError(msg)
            return service

        if not callable(fn):
            msg = f"{fn!r} is not callable"
            raise TypeError(msg)

        return fn


class DetachedCall:
    """Zero-argument command that performs a dispatcher call when invoked.

    Nothing is resolved until the call happens.
    """

    def __init__(
        self,
        dispatcher: CallDispatcher,
        fn: Any,
        resolvers: Iterable[ValueResolver] = (),
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._fn = fn
        self._resolvers = tuple(resolvers)
        self._overrides = dict(overrides or {})

    def __call__(self) -> Any:
        return self._dispatcher.call(self._fn, self._resolvers, self._overrides)

    def __repr__(self) -> str:
        return f"DetachedCall({self._fn!r})"
