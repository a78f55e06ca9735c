from __future__ import annotations

import logging
from typing import Any

from annotable.annotation import Annotation
from annotable.state import AnnotableState

logger = logging.getLogger(__name__)


class AnnotationTag:
    """
    Callable produced by ``declare`` for one annotation name.

    Each call stages a new ``Annotation`` that the next defined method consumes.
    """

    __slots__ = ("name", "_state")

    def __init__(self, name: str, *, state: AnnotableState) -> None:
        self.name = name
        self._state = state

    def __call__(self, *params: Any, **options: Any) -> None:
        annotation = Annotation(self.name, params, options)
        self._state.staged_annotations.append(annotation)
        logger.debug("Staged annotation %s (%d pending)", self.name, len(self._state.staged_annotations))

    def __repr__(self) -> str:
        return f"<AnnotationTag {self.name!r}>"


__all__ = ["AnnotationTag"]
