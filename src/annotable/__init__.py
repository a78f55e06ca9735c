from annotable.annotation import Annotation
from annotable.errors import (
    AnnotableError,
    DanglingAnnotationError,
    MissingAnnotationError,
    MissingAnnotationNameError,
    NotAnnotableError,
    UnknownAnnotationError,
)
from annotable.lookup import bind_annotated_methods, get_registry
from annotable.method import AnnotatedMethod
from annotable.mixin import Annotable, AnnotableMeta
from annotable.registry import AnnotationRegistry
from annotable.settings import AnnotableConfig, load_config
from annotable.state import AnnotableState
from annotable.tag import AnnotationTag

__version__ = "1.0.0"

__all__ = [
    "Annotable",
    "AnnotableConfig",
    "AnnotableError",
    "AnnotableMeta",
    "AnnotableState",
    "AnnotatedMethod",
    "Annotation",
    "AnnotationRegistry",
    "AnnotationTag",
    "DanglingAnnotationError",
    "MissingAnnotationError",
    "MissingAnnotationNameError",
    "NotAnnotableError",
    "UnknownAnnotationError",
    "__version__",
    "bind_annotated_methods",
    "get_registry",
    "load_config",
]
