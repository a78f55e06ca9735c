from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from annotable.annotation import Annotation
from annotable.errors import MissingAnnotationError, MissingAnnotationNameError


class AnnotatedMethod(BaseModel):
    """
    A method name along with the annotations staged right before its definition.

        one = Annotation("one")
        two = Annotation("two")
        method = AnnotatedMethod("some_method", one, two)

        method.annotation_exists("one")   # True
        method.annotation_exists("nope")  # False
        method.select_annotations("one")  # [one]
    """

    model_config = ConfigDict(frozen=True)

    __hash__ = None  # type: ignore[assignment]

    name: str
    annotations: tuple[Annotation, ...]

    def __init__(self, name: str, *annotations: Annotation) -> None:
        if not annotations:
            raise MissingAnnotationError("You must provide at least one annotation")
        super().__init__(name=name, annotations=annotations)

    def annotation_exists(self, name: str) -> bool:
        return any(annotation.name == name for annotation in self.annotations)

    def select_annotations(self, *names: str) -> list[Annotation]:
        """Return the annotations named in ``names``, in the order they were staged."""
        if not names:
            raise MissingAnnotationNameError("You must provide at least one name to select")
        return [annotation for annotation in self.annotations if annotation.name in names]

    def find_annotation(self, *names: str) -> Annotation | None:
        """Return the first staged annotation named in ``names``, or None."""
        if not names:
            raise MissingAnnotationNameError("You must provide at least one name to find")
        return next((annotation for annotation in self.annotations if annotation.name in names), None)


__all__ = ["AnnotatedMethod"]
