from __future__ import annotations

import abc
import threading
import weakref
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ._exceptions import RegistrationError


if TYPE_CHECKING:
    from collections.abc import Callable


T = TypeVar("T")

_UNRESOLVED: Any = object()


class Lifetime(Enum):
    INSTANCE = "instance"
    SINGLETON = "singleton"
    WEAK = "weak"
    FACTORY = "factory"


class Definition(abc.ABC, Generic[T]):
    """Recipe producing a service under a lifetime policy.

    Construction side effects only happen inside `resolve()`.
    """

    lifetime: Lifetime

    @abc.abstractmethod
    def resolve(self) -> T: ...

    @property
    def resolved(self) -> bool:
        """Whether a cached product currently exists."""
        return False


class InstanceDefinition(Definition[T]):
    lifetime = Lifetime.INSTANCE

    def __init__(self, instance: T) -> None:
        self._instance = instance

    def resolve(self) -> T:
        return self._instance

    @property
    def resolved(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"InstanceDefinition({type(self._instance).__name__})"


class SingletonDefinition(Definition[T]):
    """Builds once on first resolution and keeps a strong reference.

    The lock is held while the builder runs. Circular detection is per
    thread, so two threads entering a mutual singleton cycle from opposite
    ends deadlock instead of raising CircularDependencyError; callers that
    share a container across threads must resolve such graphs in one order.
    """

    lifetime = Lifetime.SINGLETON

    def __init__(self, builder: Callable[[], T]) -> None:
        self._builder = builder
        self._instance: Any = _UNRESOLVED
        self._lock = threading.RLock()

    def resolve(self) -> T:
        with self._lock:
            if self._instance is _UNRESOLVED:
                self._instance = self._builder()
            return self._instance

    @property
    def resolved(self) -> bool:
        return self._instance is not _UNRESOLVED


class WeakSingletonDefinition(Definition[T]):
    """Caches a weak reference to the product.

    Once nothing else holds the product and it is collected, the next
    resolution builds a new one.
    """

    lifetime = Lifetime.WEAK

    def __init__(self, builder: Callable[[], T]) -> None:
        self._builder = builder
        self._ref: weakref.ref[Any] | None = None
        self._lock = threading.RLock()

    def resolve(self) -> T:
        with self._lock:
            instance = self._ref() if self._ref is not None else None
            if instance is None:
                instance = self._builder()
                try:
                    self._ref = weakref.ref(instance)
                except TypeError as exc:
                    msg = f"{type(instance).__name__} instances cannot be held by a weak singleton"
                    raise RegistrationError(msg) from exc
            return instance

    @property
    def resolved(self) -> bool:
        return self._ref is not None and self._ref() is not None


class FactoryDefinition(Definition[T]):
    lifetime = Lifetime.FACTORY

    def __init__(self, builder: Callable[[], T]) -> None:
        self._builder = builder

    def resolve(self) -> T:
        return self._builder()
