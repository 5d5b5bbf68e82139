"""Dependency injection service container.

This package maps service tokens (classes or string identifiers) to instances,
injects constructor and callable parameters, and manages object lifetimes.

Exports:
- `Container`: Registration, resolution, auto-wiring and invocation, with an
  optional parent container that is consulted first.
- `Lifetime` and the definition classes: instance, singleton, weak singleton
  and factory policies.
- Value resolvers (`NamedValueResolver`, `PositionalValueResolver`,
  `TypedValueResolver`, `ContainerServiceResolver`) to supply parameters.
- Capability protocols (`Locator`, `Repository`, `Registrar`, `Dispatcher`,
  `Instantiator`) under which every container registers itself.
- The error hierarchy rooted at `ContainerError`.
"""

from ._container import Container
from ._contracts import Dispatcher, Instantiator, Locator, Registrar, Repository
from ._definitions import (
    Definition,
    FactoryDefinition,
    InstanceDefinition,
    Lifetime,
    SingletonDefinition,
    WeakSingletonDefinition,
)
from ._dispatcher import CallDispatcher, DetachedCall
from ._exceptions import (
    AliasConflictError,
    CircularDependencyError,
    ContainerError,
    NotInstantiatableError,
    RegistrationError,
    ResolutionError,
    ServiceNotFoundError,
    UnresolvableParameterError,
)
from ._instantiator import ClassInstantiator
from ._introspection import Parameter, identify
from ._registry import DefinitionRegistrar, Registry
from ._resolvers import (
    UNRESOLVED,
    ContainerServiceResolver,
    NamedValueResolver,
    PositionalValueResolver,
    Resolver,
    TypedValueResolver,
    ValueResolver,
)


__all__ = [
    "UNRESOLVED",
    "AliasConflictError",
    "CallDispatcher",
    "CircularDependencyError",
    "ClassInstantiator",
    "Container",
    "ContainerError",
    "ContainerServiceResolver",
    "Definition",
    "DefinitionRegistrar",
    "DetachedCall",
    "Dispatcher",
    "FactoryDefinition",
    "InstanceDefinition",
    "Instantiator",
    "Lifetime",
    "Locator",
    "NamedValueResolver",
    "NotInstantiatableError",
    "Parameter",
    "PositionalValueResolver",
    "Registrar",
    "RegistrationError",
    "Registry",
    "Repository",
    "ResolutionError",
    "Resolver",
    "ServiceNotFoundError",
    "SingletonDefinition",
    "TypedValueResolver",
    "UnresolvableParameterError",
    "ValueResolver",
    "WeakSingletonDefinition",
    "identify",
]
