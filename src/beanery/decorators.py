"""Decorators declaring components, configurations and factory methods.

The decorators only attach metadata to their targets; a
:class:`~beanery.registry.BeanDefinitionRegistry` (or :func:`~beanery.scanner.scan`)
turns that metadata into bean definitions.

Example:
    >>> @component()
    ... class HarryPotterQuoter(Quoter):
    ...     ...
    >>>
    >>> @configuration("books")
    ... class BookConfiguration:
    ...     @bean()
    ...     def dune_quoter(self) -> Quoter:
    ...         return DuneQuoter()
"""

import inspect
from typing import Any, Callable, Optional

from beanery.errors import BeanDefinitionError

__all__ = [
    "component",
    "configuration",
    "bean",
    "declaration_of",
    "factory_method_declaration_of",
    "COMPONENT",
    "CONFIGURATION",
]

COMPONENT = "component"
CONFIGURATION = "configuration"

_DECLARATION_ATTRIBUTE = "__bean_declaration__"
_FACTORY_METHOD_ATTRIBUTE = "__bean_factory_method__"


def set_metadata(target: Any, attribute: str, **kwargs) -> Any:
    metadata = dict(target.__dict__.get(attribute, {}))
    metadata.update(kwargs)
    setattr(target, attribute, metadata)
    return target


def declaration_of(cls: type) -> Optional[dict[str, Any]]:
    """Return the declaration metadata set directly on ``cls``, if any.

    Metadata inherited from a decorated base class is ignored.
    """
    return cls.__dict__.get(_DECLARATION_ATTRIBUTE)


def factory_method_declaration_of(func: Any) -> Optional[dict[str, Any]]:
    return getattr(func, _FACTORY_METHOD_ATTRIBUTE, None)


def component(
    name: Optional[str] = None,
    profiles: Optional[list[str]] = None,
    depends_on: Optional[list[str]] = None,
) -> Callable[[type], type]:
    """Mark a class as a component built with its zero-argument constructor.

    Args:
        name: Optional bean name; defaults to the class name with its first
            letter lower-cased.
        profiles: Optional list of profiles in which the component is active.
        depends_on: Optional list of type names whose fields are injected
            even when they are not marked with ``Inject``.
    """
    return _declare(COMPONENT, name, profiles, depends_on)


def configuration(
    name: Optional[str] = None, profiles: Optional[list[str]] = None
) -> Callable[[type], type]:
    """Mark a class as a configuration whose ``@bean`` methods declare further beans.

    The configuration class is itself built as a component.
    """
    return _declare(CONFIGURATION, name, profiles, None)


def bean(
    name: Optional[str] = None, depends_on: Optional[list[str]] = None
) -> Callable[[Callable], Callable]:
    """Mark a configuration method as a factory method.

    Args:
        name: Optional bean name; defaults to the method name.
        depends_on: Optional list of type names whose fields are injected
            into the produced bean.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.isfunction(func):
            raise BeanDefinitionError(f"{func!r} is not a function")
        return set_metadata(
            func,
            _FACTORY_METHOD_ATTRIBUTE,
            name=name or func.__name__,
            depends_on=tuple(depends_on or ()),
        )

    return decorator


def _declare(role: str, name, profiles, depends_on) -> Callable[[type], type]:
    def decorator(cls: type) -> type:
        if not inspect.isclass(cls):
            raise BeanDefinitionError(f"{cls!r} is not a class")
        return set_metadata(
            cls,
            _DECLARATION_ATTRIBUTE,
            role=role,
            name=name,
            profiles=tuple(profiles or ()),
            depends_on=tuple(depends_on or ()),
        )

    return decorator
