import unittest

from wirebox import Container, PositionalValueResolver


class TestVariadicConstructorInjection(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()

    def test_get_ignores_inherited_variadic_args_and_kwargs(self):
        class Base:
            def __init__(self, value: int = 7, *args, **kwargs):
                self.value = value
                self.args = args
                self.kwargs = kwargs

        class Derived(Base):
            ...
            # No explicit __init__; inherits Base.__init__ with *args/**kwargs

        child = self.cont.get(Derived)  # should ignore *args/**kwargs and use default for 'value'
        assert isinstance(child, Derived)
        assert child.value == 7
        assert child.args == ()
        assert child.kwargs == {}

    def test_make_forwards_unmatched_overrides_through_variadic_kwargs(self):
        class Base:
            def __init__(self, value: int = 7, **kwargs):
                self.value = value
                self.kwargs = kwargs

        class Derived(Base):
            def __init__(self, name: str, **kwargs):
                super().__init__(**kwargs)
                self.name = name

        child = self.cont.make(Derived, a=5, name="abc")

        assert isinstance(child, Derived)
        assert child.kwargs["a"] == 5
        assert child.value == 7
        assert child.name == "abc"

    def test_call_passes_keyword_only_parameters_by_name(self):
        def configure(*, retries: int = 1, verbose: bool = False):
            return retries, verbose

        assert self.cont.call(configure, verbose=True) == (1, True)

    def test_call_method_with_variadics_fills_only_named_parameters(self):
        class Formatter:
            def render(self, template: str, *parts, **context):
                return template, parts, context

        result = self.cont.call(Formatter().render, template="{x}", x=1)

        assert result == ("{x}", (), {"x": 1})

    def test_make_positional_only_constructor_from_positional_resolver(self):
        class Point:
            def __init__(self, x: int, y: int, /, *extra):
                self.x = x
                self.y = y
                self.extra = extra

        point = self.cont.make(Point, [PositionalValueResolver([3, 4, 5])])

        assert (point.x, point.y) == (3, 4)
        assert point.extra == ()
