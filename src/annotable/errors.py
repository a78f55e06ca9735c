from __future__ import annotations


class AnnotableError(Exception):
    """Base class for every error raised by annotable."""


class MissingAnnotationNameError(AnnotableError, ValueError):
    """Raised when an operation needing annotation names receives none."""


class MissingAnnotationError(AnnotableError, ValueError):
    """Raised when an annotated method is built without annotations."""


class UnknownAnnotationError(AnnotableError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Annotation {name!r} has not been declared")
        self.name = name


class DanglingAnnotationError(AnnotableError):
    def __init__(self, owner: str, names: list[str]) -> None:
        super().__init__(f"{owner} finished its definition with unconsumed annotations: {', '.join(names)}")
        self.owner = owner
        self.names = names


class NotAnnotableError(AnnotableError, TypeError):
    """Raised when an object has no annotation registry attached."""


__all__ = [
    "AnnotableError",
    "DanglingAnnotationError",
    "MissingAnnotationError",
    "MissingAnnotationNameError",
    "NotAnnotableError",
    "UnknownAnnotationError",
]
