"""Domain models used throughout the framework."""

from dataclasses import dataclass
from typing import Optional

from beanery.errors import BeanDefinitionError

__all__ = ["BeanDefinition", "Inject", "InjectionPoint"]


@dataclass(frozen=True)
class BeanDefinition:
    """Describes how to build one named bean.

    A definition either names a class to be constructed with its zero-argument
    constructor (a plain component), or a factory method to be invoked on the
    already-built instance of its owning configuration class.

    Attributes:
        name: Unique bean name.
        bean_class: The class to instantiate, or the declared return type of
            the factory method for configuration-declared beans.
        factory_method: Name of the factory method on the configuration class.
        configuration_class: The configuration class owning the factory method.
        configuration_name: The bean name the configuration instance is built under.
        depends_on: Type names whose fields receive explicit injection.
        profiles: Profiles in which the definition is active. Empty means all.
    """

    name: str
    bean_class: type
    factory_method: Optional[str] = None
    configuration_class: Optional[type] = None
    configuration_name: Optional[str] = None
    depends_on: tuple[str, ...] = ()
    profiles: tuple[str, ...] = ()

    def __post_init__(self):
        if (self.factory_method is None) != (self.configuration_class is None):
            raise BeanDefinitionError(
                f"Bean '{self.name}' must declare both a factory method and "
                "its configuration class, or neither"
            )
        if self.factory_method is not None and not self.configuration_name:
            raise BeanDefinitionError(
                f"Bean '{self.name}' does not name the configuration bean "
                f"owning factory method '{self.factory_method}'"
            )

    @property
    def is_factory_bean(self) -> bool:
        return self.factory_method is not None


@dataclass(frozen=True)
class Inject:
    """Marks a class attribute as an injection point.

    Used as metadata on an ``Annotated`` attribute annotation. Without a name the
    dependency is resolved by the declared type; with a name it is looked up
    by that exact bean name.

    Example:
        >>> class Book:
        ...     quoter: Annotated[Quoter, Inject()] = None
        ...     backup: Annotated[Quoter, Inject("duneQuoter")] = None
    """

    name: Optional[str] = None


@dataclass(frozen=True)
class InjectionPoint:
    """A field to be filled with a resolved bean.

    Attributes:
        field_name: The attribute name on the owning instance.
        declared_type: The type the attribute is annotated with.
        qualifier: Explicit bean name to resolve, if any.
    """

    field_name: str
    declared_type: Optional[type]
    qualifier: Optional[str] = None
