from __future__ import annotations

import importlib
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, Union, cast, get_args, get_origin, get_type_hints

from ._exceptions import ServiceNotFoundError


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    T = typing.TypeVar("T")

    Token = type[T] | str


def identify(token: Token[Any]) -> str:
    """Normalise a token to its string identifier.

    Classes map to their fully qualified name, so a class and its dotted
    path address the same registration.
    """
    if isinstance(token, str):
        if not token:
            msg = "Service identifier must be a non-empty string"
            raise ValueError(msg)
        return token

    if inspect.isclass(token):
        return f"{token.__module__}.{token.__qualname__}"

    msg = f"Unsupported service token: {token!r}"
    raise TypeError(msg)


def locate(token: Token[Any]) -> Any:
    """Return the class behind a token, importing dotted paths when needed.

    Accepts `pkg.mod.Class`, `pkg.mod.Outer.Inner` and `pkg.mod:Class`.
    """
    if not isinstance(token, str):
        return token

    if ":" in token:
        module_name, _, attr_path = token.partition(":")
        return _import_attr(token, module_name, attr_path.split("."))

    parts = token.split(".")
    for split in range(len(parts) - 1, 0, -1):
        try:
            return _import_attr(token, ".".join(parts[:split]), parts[split:])
        except ServiceNotFoundError:
            continue

    raise ServiceNotFoundError(token)


def _import_attr(token: str, module_name: str, attrs: list[str]) -> Any:
    try:
        target: Any = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        raise ServiceNotFoundError(token) from exc

    for attr in attrs:
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise ServiceNotFoundError(token) from exc

    return target


def not_instantiatable_reason(cls: Any) -> str | None:
    """Explain why `cls` cannot be auto-wired, or return None when it can."""
    if not inspect.isclass(cls):
        return "not a class"
    if is_protocol(cls):
        return "protocols cannot be instantiated"
    if inspect.isabstract(cls):
        return "abstract class"
    if cls.__module__ == "builtins":
        return "builtin types are not auto-wired"
    return None


def is_instantiable(cls: Any) -> bool:
    return not_instantiatable_reason(cls) is None


if hasattr(typing, "is_protocol"):
    # https://docs.python.org/3/library/typing.html#typing.is_protocol
    def is_protocol(tp: Any) -> bool:
        return inspect.isclass(tp) and typing.is_protocol(tp)

else:

    def is_protocol(tp: Any) -> bool:
        """Detect whether 'tp' is a typing.Protocol subclass (safe)."""
        return (
            inspect.isclass(tp)
            and issubclass(tp, cast("type", Protocol))
            and bool(getattr(tp, "_is_protocol", False))
        )


def annotation_candidates(annotation: Any) -> list[Any]:
    """Classes worth looking up for an annotation; unwraps `Optional[X]`."""
    if annotation is inspect.Parameter.empty:
        return []

    if get_origin(annotation) in (Union, types.UnionType):
        return [arg for arg in get_args(annotation) if arg is not type(None) and inspect.isclass(arg)]

    if inspect.isclass(annotation):
        return [annotation]

    return []


@dataclass(frozen=True)
class Parameter:
    """Declared parameter of a constructor or callable."""

    name: str
    position: int
    kind: Any
    annotation: Any
    default: Any
    owner: Any

    @property
    def annotated(self) -> bool:
        return self.annotation is not inspect.Parameter.empty

    @property
    def has_default(self) -> bool:
        return self.default is not inspect.Parameter.empty

    @property
    def variadic(self) -> bool:
        return self.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)

    @property
    def owner_name(self) -> str:
        return getattr(self.owner, "__qualname__", None) or repr(self.owner)


def parameters_of(fn: Callable[..., Any]) -> list[Parameter]:
    """Describe the parameters of `fn` in declaration order.

    Raises TypeError/ValueError from `inspect.signature` when no signature
    can be read.
    """
    sig = inspect.signature(fn)
    hints = _type_hints(fn)

    return [
        Parameter(
            name=name,
            position=position,
            kind=p.kind,
            annotation=hints.get(name, p.annotation if not isinstance(p.annotation, str) else p.empty),
            default=p.default,
            owner=fn,
        )
        for position, (name, p) in enumerate(sig.parameters.items())
    ]


def _type_hints(fn: Callable[..., Any]) -> dict[str, Any]:
    if inspect.isclass(fn):
        target: Any = inspect.getattr_static(fn, "__init__", None)
    elif inspect.isfunction(fn) or inspect.ismethod(fn):
        target = getattr(fn, "__func__", fn)
    else:
        target = getattr(type(fn), "__call__", None)

    if target is None:
        return {}

    try:
        hints = get_type_hints(target)
    except TypeError:
        hints = {}
    except NameError as exc:
        logger.warning(
            "'%s' name error retrieving %s type hints",
            exc.name,
            getattr(fn, "__qualname__", repr(fn)),
        )
        hints = {}

    hints.pop("return", None)
    return hints
