import unittest

from wirebox import Container, InstanceDefinition, Locator


class TestContainerParentBehavior(unittest.TestCase):
    parent: Container
    child: Container

    def setUp(self):
        self.parent = Container()
        self.child = self.parent.create_child()

    def test_child_knows_its_parent(self):
        assert self.child.parent is self.parent
        assert self.parent.parent is None

    def test_parent_registration_wins_over_child_registration(self):
        class Service: ...

        parent_instance = Service()
        child_instance = Service()

        self.parent.singleton(Service, lambda: parent_instance)
        self.child.singleton(Service, lambda: child_instance)

        resolved = self.child.get(Service)

        assert resolved is parent_instance

    def test_child_resolves_from_parent_when_not_registered_locally(self):
        class Service: ...

        instance = Service()
        self.parent.singleton(Service, lambda: instance)

        assert self.child.has(Service)
        assert self.child.get(Service) is instance

    def test_child_uses_local_registration_when_parent_lacks_it(self):
        class Service: ...

        self.child.singleton(Service)

        assert not self.parent.has(Service)
        assert self.child.get(Service) is self.child.get(Service)

    def test_make_in_child_never_delegates_to_parent(self):
        class Service: ...

        self.parent.singleton(Service)

        assert self.child.make(Service) is not self.parent.get(Service)

    def test_child_injects_parent_services_while_auto_wiring(self):
        class DB: ...

        class Repo:
            def __init__(self, db: DB):
                self.db = db

        self.parent.singleton(DB)
        repo = self.child.get(Repo)

        assert repo.db is self.parent.get(DB)

    def test_child_capability_lookup_is_answered_by_parent(self):
        assert self.child.get(Locator) is self.parent
        assert self.child.get(Container) is self.parent

    def test_child_container_constructed_directly(self):
        child = Container(self.parent)
        self.parent.define("answer", InstanceDefinition(42))

        assert child.get("answer") == 42

    def test_child_logs_delegation_to_parent(self):
        self.parent.define("answer", InstanceDefinition(42))

        with self.assertLogs("wirebox", level="DEBUG") as logs:
            assert self.child.get("answer") == 42

        assert any("Delegating 'answer' to the parent container" in line for line in logs.output)
