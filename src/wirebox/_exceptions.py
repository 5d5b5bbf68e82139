from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._introspection import Parameter


class ContainerError(RuntimeError):
    pass


class ResolutionError(ContainerError):
    """Base class for failures while producing a service.

    `trail` collects the identifiers that were being resolved when the error
    propagated, innermost first.
    """

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)
        self.trail: list[str] = []


class ServiceNotFoundError(ResolutionError, LookupError):
    def __init__(self, identifier: str) -> None:
        super().__init__(f"No registration found for token: {identifier!r}")
        self.identifier = identifier


class NotInstantiatableError(ResolutionError):
    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"Cannot instantiate {identifier!r}: {reason}")
        self.identifier = identifier
        self.reason = reason


class UnresolvableParameterError(ResolutionError):
    def __init__(self, parameter: Parameter) -> None:
        ann = parameter.annotation
        ann_repr = getattr(ann, "__name__", repr(ann)) if parameter.annotated else "no-annotation"
        super().__init__(
            f"Cannot satisfy parameter '{parameter.name}' for {parameter.owner_name}. "
            f"No override/registration/default found (annotation: {ann_repr})."
        )
        self.parameter = parameter
        self.owner = parameter.owner


class CircularDependencyError(ResolutionError):
    def __init__(self, chain: Sequence[str]) -> None:
        super().__init__(f"Circular dependency detected: {' -> '.join(chain)}")
        self.chain = list(chain)


class RegistrationError(ContainerError):
    pass


class AliasConflictError(RegistrationError):
    pass
