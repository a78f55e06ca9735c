from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from annotable.annotation import Annotation
from annotable.method import AnnotatedMethod
from annotable.registry import AnnotationRegistry
from annotable.settings import AnnotableConfig, load_config
from annotable.tag import AnnotationTag

logger = logging.getLogger(__name__)

REGISTRY_ATTRIBUTE = "__annotable_registry__"

_CONFIG_KEYWORDS = frozenset({"config", *AnnotableConfig.model_fields})

# Functions the compiler binds in a class body on its own.
_IMPLICIT_NAMES = frozenset({"__annotate__", "__annotate_func__"})


def is_method_definition(name: str, value: Any, config: AnnotableConfig) -> bool:
    """Any callable or descriptor bound on a host counts, except tags and nested classes."""
    if name in _IMPLICIT_NAMES or isinstance(value, (AnnotationTag, type)):
        return False
    if isinstance(value, property):
        return config.track_properties
    return callable(value) or hasattr(value, "__get__")


def _split_kwargs(kwargs: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    config_kwargs = {key: value for key, value in kwargs.items() if key in _CONFIG_KEYWORDS}
    class_kwargs = {key: value for key, value in kwargs.items() if key not in _CONFIG_KEYWORDS}
    return config_kwargs, class_kwargs


def _build_registry(name: str, config_kwargs: dict[str, Any]) -> AnnotationRegistry:
    config = load_config(config_kwargs.pop("config", None), **config_kwargs)
    return AnnotationRegistry(name, config=config)


class AnnotableNamespace(dict):
    """
    Class-body namespace of an annotable class.

    Exposes ``declare`` and the declared tags as bare names inside the body, and
    reports every method bound in the body to the class registry.
    """

    def __init__(self, registry: AnnotationRegistry) -> None:
        super().__init__()
        self.registry = registry
        self.declare_helper = self._declare
        super().__setitem__("declare", self.declare_helper)

    def _declare(self, *annotation_names: str) -> None:
        self.registry.declare(*annotation_names)
        for name in annotation_names:
            self[name] = self.registry.tags[name]

    def __setitem__(self, key: str, value: Any) -> None:
        super().__setitem__(key, value)
        if is_method_definition(key, value, self.registry.config):
            self.registry.on_method_defined(key)


class AnnotableMeta(type):
    """
    Metaclass giving a class its own annotation registry.

        class Needy(Annotable):
            declare("my_annotation", "my_other_annotation")

            my_annotation(42, hello="world!")
            def method_needing_meta_data(self): ...

            def regular_method(self): ...

        Needy.annotated_method_exists("method_needing_meta_data")  # True
        Needy.annotated_method_exists("regular_method")            # False

    Config keywords (``config``, ``dangling_annotations``, ``track_properties``)
    may be passed in the class statement; other keywords reach ``__init_subclass__``.
    """

    @classmethod
    def __prepare__(mcs, name: str, bases: tuple[type, ...], **kwargs: Any) -> AnnotableNamespace:
        config_kwargs, _ = _split_kwargs(kwargs)
        return AnnotableNamespace(_build_registry(name, config_kwargs))

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: Mapping[str, Any], **kwargs: Any):
        config_kwargs, class_kwargs = _split_kwargs(kwargs)
        attrs = dict(namespace)
        if isinstance(namespace, AnnotableNamespace):
            registry = namespace.registry
            if attrs.get("declare") is namespace.declare_helper:
                del attrs["declare"]
        else:
            registry = _build_registry(name, config_kwargs)
        registry.owner = attrs.get("__qualname__", name)
        attrs[REGISTRY_ATTRIBUTE] = registry
        cls = super().__new__(mcs, name, bases, attrs, **class_kwargs)
        logger.debug(
            "Created annotable class %s with %d annotated methods",
            registry.owner,
            len(registry.state.annotated_methods),
        )
        registry.finalize()
        return cls

    def __setattr__(cls, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        registry = cls.__dict__.get(REGISTRY_ATTRIBUTE)
        if registry is not None and is_method_definition(name, value, registry.config):
            registry.on_method_defined(name)

    @property
    def __annotable__(cls) -> AnnotationRegistry:
        return cls.__dict__[REGISTRY_ATTRIBUTE]

    def declare(cls, *annotation_names: str) -> None:
        """Declare annotation tags after the class body, exposing them as class attributes."""
        registry = cls.__annotable__
        registry.declare(*annotation_names)
        for name in annotation_names:
            setattr(cls, name, registry.tags[name])

    def annotated_methods(cls, *names: str) -> list[AnnotatedMethod]:
        return cls.__annotable__.annotated_methods(*names)

    def annotated_method_exists(cls, name: str) -> bool:
        return cls.__annotable__.annotated_method_exists(name)

    def _on_method_defined(cls, name: str) -> None:
        cls.__annotable__.on_method_defined(name)

    def _remove_annotated_method(cls, name: str) -> None:
        cls.__annotable__.remove_annotated_method(name)

    def _staged_annotations(cls) -> list[Annotation]:
        return cls.__annotable__.staged_annotations

    def _reset_staged_annotations(cls) -> None:
        cls.__annotable__.reset_staged_annotations()


class Annotable(metaclass=AnnotableMeta):
    """Mixin base for classes whose methods can be annotated."""

    __slots__ = ()


__all__ = [
    "REGISTRY_ATTRIBUTE",
    "Annotable",
    "AnnotableMeta",
    "AnnotableNamespace",
    "is_method_definition",
]
