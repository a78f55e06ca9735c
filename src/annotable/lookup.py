from __future__ import annotations

import logging
from types import ModuleType
from typing import Any

from annotable.errors import NotAnnotableError
from annotable.method import AnnotatedMethod
from annotable.mixin import REGISTRY_ATTRIBUTE
from annotable.registry import AnnotationRegistry

logger = logging.getLogger(__name__)


def get_registry(host: Any) -> AnnotationRegistry:
    """
    Return the annotation registry owning ``host``.

    ``host`` may be a registry, an annotable class, an instance of one, or a
    module that stores its registry under ``__annotable_registry__``.
    """
    if isinstance(host, AnnotationRegistry):
        return host
    owner = host if isinstance(host, (type, ModuleType)) else type(host)
    registry = vars(owner).get(REGISTRY_ATTRIBUTE)
    if not isinstance(registry, AnnotationRegistry):
        msg = f"{owner!r} has no annotation registry"
        raise NotAnnotableError(msg)
    return registry


def bind_annotated_methods(host: Any, *names: str) -> list[tuple[Any, AnnotatedMethod]]:
    """
    Pair each annotated method of ``host`` with the attribute it names.

    Filtering by ``names`` follows ``annotated_methods``. Entries whose
    attribute has since been deleted are skipped.
    """
    registry = get_registry(host)
    bound: list[tuple[Any, AnnotatedMethod]] = []
    for method in registry.annotated_methods(*names):
        try:
            member = getattr(host, method.name)
        except AttributeError:
            logger.debug("Skipping %s.%s: attribute no longer exists", registry.owner, method.name)
            continue
        bound.append((member, method))
    return bound


__all__ = ["bind_annotated_methods", "get_registry"]
