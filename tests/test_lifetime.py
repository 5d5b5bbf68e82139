import gc
import logging
import unittest

import pytest

from wirebox import Container, Lifetime, RegistrationError


class Session: ...


class TestLifetimeControl(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()

    def test_singleton_returns_same_instance(self):
        class A: ...

        self.cont.singleton(A)
        a1 = self.cont.get(A)
        a2 = self.cont.get(A)
        assert a2 is a1, "SINGLETON should return the cached instance"

    def test_factory_returns_new_instances(self):
        class A: ...

        self.cont.factory(A)
        a1 = self.cont.get(A)
        a2 = self.cont.get(A)
        assert a2 is not a1, "FACTORY should return new instances"
        assert isinstance(a1, A)
        assert isinstance(a2, A)

    def test_instance_is_always_returned(self):
        class A: ...

        inst = A()
        self.cont.instance(inst)
        a = self.cont.get(A)
        b = self.cont.get(A)
        assert a is inst
        assert b is inst

    def test_definitions_report_their_lifetime(self):
        class A: ...

        assert self.cont.singleton("s", A).definition.lifetime is Lifetime.SINGLETON
        assert self.cont.weak("w", A).definition.lifetime is Lifetime.WEAK
        assert self.cont.factory("f", A).definition.lifetime is Lifetime.FACTORY
        assert self.cont.instance(A()).definition.lifetime is Lifetime.INSTANCE

    def test_singleton_builder_is_not_called_at_registration(self):
        calls = []

        def build():
            calls.append(1)
            return Session()

        self.cont.singleton(Session, build)
        assert calls == []

        self.cont.get(Session)
        self.cont.get(Session)
        assert calls == [1]


class TestWeakSingleton(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()
        self.built = 0

        def build():
            self.built += 1
            return Session()

        self.cont.weak(Session, build)

    def test_weak_reuses_instance_while_it_is_held(self):
        first = self.cont.get(Session)
        second = self.cont.get(Session)

        assert first is second
        assert self.built == 1

    def test_weak_rebuilds_after_instance_is_collected(self):
        first = self.cont.get(Session)
        assert self.cont.definition(Session).resolved

        del first
        gc.collect()

        assert not self.cont.definition(Session).resolved
        second = self.cont.get(Session)

        assert isinstance(second, Session)
        assert self.built == 2


def test_weak_product_without_weakref_support_raises():
    c = Container()
    c.weak("numbers", lambda: [1, 2, 3])

    with pytest.raises(RegistrationError):
        c.get("numbers")


def test_redefining_replaces_previous_definition():
    c = Container()
    c.factory("value", lambda: 1)
    c.factory("value", lambda: 2)

    assert c.get("value") == 2


def test_redefining_resolved_singleton_warns_about_orphaned_instance(caplog):
    c = Container()
    c.singleton(Session)
    c.get(Session)

    with caplog.at_level(logging.WARNING, logger="wirebox"):
        c.singleton(Session)

    assert "orphaned" in caplog.text
    assert not c.definition(Session).resolved
