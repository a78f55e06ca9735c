from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from annotable.annotation import Annotation
from annotable.method import AnnotatedMethod

if TYPE_CHECKING:
    from annotable.tag import AnnotationTag


@dataclass
class AnnotableState:
    staged_annotations: list[Annotation] = field(default_factory=list)
    annotated_methods: list[AnnotatedMethod] = field(default_factory=list)
    tags: dict[str, AnnotationTag] = field(default_factory=dict)


__all__ = ["AnnotableState"]
