import functools

import pytest

from annotable import (
    Annotable,
    AnnotableConfig,
    AnnotableMeta,
    AnnotationRegistry,
    DanglingAnnotationError,
    MissingAnnotationNameError,
)


def test_annotated_method_scenario() -> None:
    class Needy(Annotable):
        declare("tag1")

        tag1(42, k="v")

        def foo(self) -> str:
            return "foo"

        def bar(self) -> str:
            return "bar"

    assert Needy.annotated_method_exists("foo") is True
    assert Needy.annotated_method_exists("bar") is False
    method = Needy.annotated_methods("tag1")[0]
    assert method.name == "foo"
    assert method.annotations[0].params == (42,)
    assert method.annotations[0].options == {"k": "v"}
    assert Needy().foo() == "foo"


def test_declare_helper_does_not_leak_into_class() -> None:
    class Host(Annotable):
        declare("tag1")

    assert "declare" not in vars(Host)
    assert "tag1" in vars(Host)


def test_declare_without_names_fails_in_class_body() -> None:
    with pytest.raises(MissingAnnotationNameError):

        class Host(Annotable):
            declare()


def test_declare_after_class_body() -> None:
    class Host(Annotable):
        pass

    Host.declare("late")
    Host.late("x")
    Host.handler = lambda self: "handled"

    assert Host.annotated_method_exists("handler") is True
    assert Host().handler() == "handled"


def test_generated_tag_stages_on_class() -> None:
    class Host(Annotable):
        declare("hello")

    Host.hello("some_param", some="option")

    [staged] = Host._staged_annotations()
    assert staged.name == "hello"
    assert staged.params == ("some_param",)
    assert staged.options == {"some": "option"}


def test_several_annotations_attach_in_order() -> None:
    class Host(Annotable):
        declare("a", "b")

        a(1)
        b(2)

        def m(self) -> None: ...

    [method] = Host.annotated_methods()
    assert [annotation.name for annotation in method.annotations] == ["a", "b"]
    assert Host._staged_annotations() == []


def test_redefinition_in_class_body_replaces_annotations() -> None:
    class Host(Annotable):
        declare("a", "c")

        a()

        def m(self) -> None: ...

        c()

        def m(self) -> None:  # noqa: F811
            ...

    [method] = Host.annotated_methods()
    assert [annotation.name for annotation in method.annotations] == ["c"]


def test_static_and_class_methods_are_tracked() -> None:
    class Host(Annotable):
        declare("a")

        a()

        @staticmethod
        def s() -> int:
            return 1

        a()

        @classmethod
        def c(cls) -> int:
            return 2

        value = 3

    assert [method.name for method in Host.annotated_methods()] == ["s", "c"]
    assert Host.s() == 1
    assert Host.c() == 2


def test_properties_are_tracked_when_configured() -> None:
    class Plain(Annotable, track_properties=False):
        declare("a")

        a()

        @property
        def p(self) -> int:
            return 1

    class Tracked(Annotable, track_properties=True):
        declare("a")

        a()

        @property
        def p(self) -> int:
            return 1

    assert Plain.annotated_method_exists("p") is False
    assert Tracked.annotated_method_exists("p") is True


def test_each_class_has_its_own_registry() -> None:
    class Parent(Annotable):
        declare("a")

        a()

        def m(self) -> None: ...

    class Child(Parent):
        pass

    assert Parent.annotated_method_exists("m") is True
    assert Child.annotated_methods() == []
    assert Child.__annotable__ is not Parent.__annotable__


def test_remove_and_reset_helpers() -> None:
    class Host(Annotable):
        declare("a")

        a()

        def m(self) -> None: ...

        a()

    Host._remove_annotated_method("m")
    Host._reset_staged_annotations()

    assert Host.annotated_methods() == []
    assert Host._staged_annotations() == []


def test_explicit_hook_call() -> None:
    class Host(Annotable):
        declare("a")

    Host.a()
    Host._on_method_defined("virtual")

    assert Host.annotated_method_exists("virtual") is True


def test_dangling_annotations_error_policy() -> None:
    with pytest.raises(DanglingAnnotationError):

        class Host(Annotable, dangling_annotations="error"):
            declare("a")

            def m(self) -> None: ...

            a()


def test_config_object_in_class_statement() -> None:
    class Host(Annotable, config=AnnotableConfig(track_properties=True)):
        pass

    assert Host.__annotable__.config.track_properties is True


def test_other_class_keywords_reach_init_subclass() -> None:
    seen = {}

    class Base(Annotable):
        def __init_subclass__(cls, flavour: str = "plain", **kwargs) -> None:
            super().__init_subclass__(**kwargs)
            seen[cls.__name__] = flavour

    class Host(Base, flavour="spicy", dangling_annotations="warn"):
        pass

    assert seen == {"Host": "spicy"}
    assert Host.__annotable__.config.dangling_annotations == "warn"


def test_metaclass_can_be_used_directly() -> None:
    class Host(metaclass=AnnotableMeta):
        declare("a")

        a()

        def m(self) -> None: ...

    assert isinstance(Host.__annotable__, AnnotationRegistry)
    assert Host.annotated_method_exists("m") is True


def test_metaclass_called_with_plain_namespace() -> None:
    Host = AnnotableMeta("Host", (), {"m": lambda self: None})

    assert Host.annotated_methods() == []
    Host.declare("a")
    Host.a()
    Host.n = lambda self: None
    assert Host.annotated_method_exists("n") is True


def test_lru_cached_method_consumes_its_own_annotations() -> None:
    class Host(Annotable):
        declare("a")

        a("for_cached")

        @functools.lru_cache
        def cached(self) -> int:
            return 1

        def plain(self) -> None: ...

    [method] = Host.annotated_methods()
    assert method.name == "cached"
    assert method.annotations[0].params == ("for_cached",)
    assert Host.annotated_method_exists("plain") is False
    assert Host().cached() == 1


def test_cached_property_consumes_its_own_annotations() -> None:
    class Host(Annotable):
        declare("a")

        a("for_cached")

        @functools.cached_property
        def total(self) -> int:
            return 2

        def plain(self) -> None: ...

    assert [method.name for method in Host.annotated_methods()] == ["total"]
    assert Host().total == 2


def test_partialmethod_and_singledispatchmethod_are_tracked() -> None:
    class Host(Annotable):
        declare("a")

        def _scale(self, value: int, factor: int) -> int:
            return value * factor

        a("double")
        double = functools.partialmethod(_scale, factor=2)

        a("render")

        @functools.singledispatchmethod
        def render(self, value: object) -> str:
            return "object"

    assert [method.name for method in Host.annotated_methods()] == ["double", "render"]
    assert Host().double(3) == 6


def test_callable_objects_are_tracked_after_class_body() -> None:
    class Handler:
        def __call__(self) -> str:
            return "called"

    class Host(Annotable):
        declare("a")

    Host.a()
    Host.handler = Handler()

    assert Host.annotated_method_exists("handler") is True


def test_values_nested_classes_and_tags_are_not_methods() -> None:
    class Host(Annotable):
        declare("a")

        a()

        limit = 3
        label = "host"
        names = ("x", "y")

        class Inner:
            pass

        def m(self) -> None: ...

    [method] = Host.annotated_methods()
    assert method.name == "m"
