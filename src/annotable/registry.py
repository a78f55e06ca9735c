from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from annotable.annotation import Annotation
from annotable.errors import DanglingAnnotationError, MissingAnnotationNameError, UnknownAnnotationError
from annotable.method import AnnotatedMethod
from annotable.settings import AnnotableConfig, load_config
from annotable.state import AnnotableState
from annotable.tag import AnnotationTag

logger = logging.getLogger(__name__)

TDefinition = TypeVar("TDefinition")


class AnnotationRegistry:
    """
    Annotation bookkeeping for a single host (a class or a module).

    Classes built by ``AnnotableMeta`` get one automatically and feed it every
    method they define. Modules create one explicitly and register functions
    with ``track``:

        annotations = AnnotationRegistry(__name__)
        annotations.declare("command")

        annotations.command("greet", help="Say hello")
        @annotations.track
        def greet(): ...

    Declared tags are reachable as attributes unless the name collides with a
    registry attribute; ``invoke`` always works.
    """

    def __init__(
        self,
        owner: str | None = None,
        *,
        state: AnnotableState | None = None,
        config: AnnotableConfig | Mapping[str, Any] | None = None,
    ) -> None:
        self.owner = owner or "<anonymous>"
        self.state = state or AnnotableState()
        self.config = config if isinstance(config, AnnotableConfig) else load_config(config)

    def __getattr__(self, name: str) -> AnnotationTag:
        state = self.__dict__.get("state")
        if state is not None and name in state.tags:
            return state.tags[name]
        msg = f"{type(self).__name__!r} object has no attribute {name!r}"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return (
            f"<AnnotationRegistry {self.owner} tags={sorted(self.state.tags)} "
            f"methods={[method.name for method in self.state.annotated_methods]}>"
        )

    @property
    def tags(self) -> dict[str, AnnotationTag]:
        return self.state.tags

    def declare(self, *annotation_names: str) -> None:
        """Create one tag per name; calling a tag stages an annotation for the next method."""
        if not annotation_names:
            raise MissingAnnotationNameError("You must provide at least one annotation name")
        for name in annotation_names:
            self.state.tags[name] = AnnotationTag(name, state=self.state)
        logger.debug("Declared annotations on %s: %s", self.owner, ", ".join(annotation_names))

    def invoke(self, name: str, *params: Any, **options: Any) -> None:
        tag = self.state.tags.get(name)
        if tag is None:
            raise UnknownAnnotationError(name)
        tag(*params, **options)

    def annotated_methods(self, *names: str) -> list[AnnotatedMethod]:
        """Return every annotated method, or only those carrying one of ``names``."""
        methods = self.state.annotated_methods
        if not methods or not names:
            return list(methods)
        return [method for method in methods if any(method.annotation_exists(name) for name in names)]

    def annotated_method_exists(self, name: str) -> bool:
        return any(method.name == name for method in self.annotated_methods())

    def on_method_defined(self, name: str) -> None:
        if not self.staged_annotations:
            return
        if self.annotated_method_exists(name):
            logger.debug("Replacing annotations of %s.%s", self.owner, name)
            self.remove_annotated_method(name)
        self.state.annotated_methods.append(AnnotatedMethod(name, *self.staged_annotations))
        logger.debug(
            "Annotated %s.%s with %s",
            self.owner,
            name,
            ", ".join(annotation.name for annotation in self.staged_annotations),
        )
        self.reset_staged_annotations()

    def remove_annotated_method(self, name: str) -> None:
        self.state.annotated_methods[:] = [method for method in self.state.annotated_methods if method.name != name]

    @property
    def staged_annotations(self) -> list[Annotation]:
        return self.state.staged_annotations

    def reset_staged_annotations(self) -> None:
        self.state.staged_annotations = []

    def track(self, definition: TDefinition) -> TDefinition:
        """Decorator reporting ``definition`` as a newly defined method; returns it unchanged."""
        self.on_method_defined(definition_name(definition))
        return definition

    def finalize(self) -> None:
        """Apply the dangling-annotation policy to whatever is still staged."""
        pending = [annotation.name for annotation in self.staged_annotations]
        if not pending:
            return
        policy = self.config.dangling_annotations
        if policy == "error":
            raise DanglingAnnotationError(self.owner, pending)
        if policy == "warn":
            logger.warning(
                "%s finished its definition with unconsumed annotations: %s",
                self.owner,
                ", ".join(pending),
            )
            return
        logger.debug("Keeping %d staged annotations on %s for the next method", len(pending), self.owner)


def definition_name(definition: Any) -> str:
    if isinstance(definition, (staticmethod, classmethod)):
        definition = definition.__func__
    elif isinstance(definition, property):
        definition = definition.fget
    name = getattr(definition, "__name__", None)
    if not isinstance(name, str):
        # cached_property, partialmethod and similar wrappers keep the function in .func
        name = getattr(getattr(definition, "func", None), "__name__", None)
    if not isinstance(name, str):
        msg = f"Cannot determine the method name of {definition!r}"
        raise TypeError(msg)
    return name


__all__ = ["AnnotationRegistry", "definition_name"]
