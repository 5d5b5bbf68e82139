import gc

import pytest

from wirebox import (
    FactoryDefinition,
    InstanceDefinition,
    Lifetime,
    RegistrationError,
    SingletonDefinition,
    WeakSingletonDefinition,
)


class Product: ...


class Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self) -> Product:
        self.calls += 1
        return Product()


def test_instance_definition_returns_same_object_without_builder():
    product = Product()
    definition = InstanceDefinition(product)

    assert definition.resolve() is product
    assert definition.resolve() is product
    assert definition.lifetime is Lifetime.INSTANCE
    assert definition.resolved


def test_singleton_definition_builds_once():
    builder = Counter()
    definition = SingletonDefinition(builder)

    assert not definition.resolved
    first = definition.resolve()

    assert definition.resolve() is first
    assert builder.calls == 1
    assert definition.resolved


def test_singleton_definition_caches_none():
    calls = []

    def builder():
        calls.append(1)

    definition = SingletonDefinition(builder)

    assert definition.resolve() is None
    assert definition.resolve() is None
    assert calls == [1]


def test_singleton_definition_retries_after_failed_build():
    attempts = []

    def builder():
        attempts.append(1)
        if len(attempts) == 1:
            msg = "boom"
            raise RuntimeError(msg)
        return Product()

    definition = SingletonDefinition(builder)

    with pytest.raises(RuntimeError):
        definition.resolve()

    assert not definition.resolved
    assert isinstance(definition.resolve(), Product)


def test_factory_definition_builds_every_time():
    builder = Counter()
    definition = FactoryDefinition(builder)

    assert definition.resolve() is not definition.resolve()
    assert builder.calls == 2
    assert definition.lifetime is Lifetime.FACTORY


def test_weak_singleton_definition_rebuilds_after_collection():
    builder = Counter()
    definition = WeakSingletonDefinition(builder)

    held = definition.resolve()
    assert definition.resolve() is held
    assert builder.calls == 1

    del held
    gc.collect()

    assert not definition.resolved
    assert isinstance(definition.resolve(), Product)
    assert builder.calls == 2


def test_weak_singleton_definition_rejects_unreferenceable_products():
    definition = WeakSingletonDefinition(lambda: 42)

    with pytest.raises(RegistrationError):
        definition.resolve()
