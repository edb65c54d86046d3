"""Discovery of injectable fields on bean classes.

Injection points are declared with ``typing.Annotated`` and the :class:`Inject`
marker, so the classes being wired never need to know about the container:

    >>> class HarryPotter:
    ...     quoter: Annotated[Quoter, Inject()] = None

Introspection happens once per class; the results are cached and reused for
every instance of that class.
"""

import inspect
import sys
from functools import lru_cache
from types import UnionType
from typing import (
    Annotated,
    Any,
    ClassVar,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from beanery.domain import Inject, InjectionPoint
from beanery.errors import BeanDefinitionError

__all__ = ["injection_points", "annotated_fields", "type_names"]


@lru_cache(maxsize=None)
def injection_points(cls: type) -> tuple[InjectionPoint, ...]:
    """Return the fields of ``cls`` marked for injection with :class:`Inject`.

    Annotations declared on base classes are included.

    Args:
        cls: The class to inspect.

    Returns:
        The injection points, in annotation order.

    Raises:
        BeanDefinitionError: If the annotation of a field marked with
            ``Inject`` cannot be evaluated.
    """
    return tuple(point for point, marked in _fields(cls) if marked)


@lru_cache(maxsize=None)
def annotated_fields(cls: type) -> tuple[InjectionPoint, ...]:
    """Return every annotated attribute of ``cls``, marked for injection or not."""
    return tuple(point for point, _ in _fields(cls))


def type_names(declared_type: Optional[type]) -> frozenset[str]:
    """Names a type may be referred to by in a ``depends_on`` list.

    Example:
        >>> type_names(Quoter)  # frozenset({"Quoter", "books.quoters.Quoter"})
    """
    if declared_type is None:
        return frozenset()
    name = getattr(declared_type, "__name__", None)
    if name is None:
        return frozenset({str(declared_type)})
    qualified = f"{declared_type.__module__}.{getattr(declared_type, '__qualname__', name)}"
    return frozenset({name, qualified})


def _fields(cls: type) -> list[tuple[InjectionPoint, bool]]:
    """Evaluate annotations one field at a time, base classes first.

    A field whose annotation cannot be evaluated is skipped unless it is
    marked with ``Inject``, so names imported only for type checking do not
    break beans that never ask for them to be injected.
    """
    hints: dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        for field_name, raw in _raw_annotations(base).items():
            try:
                hints[field_name] = _evaluate(base, field_name, raw)
            except (NameError, AttributeError, TypeError, SyntaxError) as e:
                if _mentions_inject(raw):
                    raise BeanDefinitionError(
                        f"Cannot evaluate annotation of {cls.__name__}.{field_name}: {e}"
                    ) from e
                hints.pop(field_name, None)

    return [
        _make_injection_point(field_name, annotation)
        for field_name, annotation in hints.items()
        if get_origin(annotation) is not ClassVar
    ]


def _raw_annotations(base: type) -> dict[str, Any]:
    if sys.version_info >= (3, 14):
        from annotationlib import Format

        return inspect.get_annotations(base, format=Format.FORWARDREF)
    return inspect.get_annotations(base)


def _evaluate(base: type, field_name: str, raw: Any) -> Any:
    holder = type(
        base.__name__,
        (),
        {"__annotations__": {field_name: raw}, "__module__": base.__module__},
    )
    module = sys.modules.get(base.__module__)
    # class attributes act as globals and module names as locals, as in get_type_hints
    return get_type_hints(
        holder,
        globalns=dict(vars(base)),
        localns=dict(vars(module)) if module else None,
        include_extras=True,
    )[field_name]


def _mentions_inject(raw: Any) -> bool:
    return Inject.__name__ in (raw if isinstance(raw, str) else repr(raw))


def _make_injection_point(field_name: str, annotation: Any) -> tuple[InjectionPoint, bool]:
    annotation = _strip_optional(annotation)
    if get_origin(annotation) is Annotated:
        base_type, *metadata = get_args(annotation)
        marker = next((m for m in metadata if isinstance(m, Inject)), None)
        return (
            InjectionPoint(field_name, _declared_type(base_type), marker.name if marker else None),
            marker is not None,
        )
    return InjectionPoint(field_name, _declared_type(annotation), None), False


def _declared_type(annotation: Any) -> Optional[type]:
    """Reduce an annotation to a class usable with ``isinstance``.

    ``Optional[T]`` becomes ``T`` and parameterised generics become their origin.
    """
    annotation = _strip_optional(annotation)
    origin = get_origin(annotation)
    if origin in (Union, UnionType):
        return None
    if origin is Annotated:
        return _declared_type(get_args(annotation)[0])
    if origin is not None:
        return origin if isinstance(origin, type) else None
    return annotation if isinstance(annotation, type) else None


def _strip_optional(annotation: Any) -> Any:
    # Python < 3.11 wraps annotations with a None default in Optional
    if get_origin(annotation) in (Union, UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation
