"""Registration of bean definitions and profile-based filtering."""

import inspect
import logging
from typing import Any, Optional, get_type_hints

from beanery.decorators import CONFIGURATION, declaration_of, factory_method_declaration_of
from beanery.domain import BeanDefinition
from beanery.errors import BeanDefinitionError

__all__ = ["BeanDefinitionRegistry", "default_bean_name"]

logger = logging.getLogger(__name__)


def default_bean_name(cls: type) -> str:
    """Derive a bean name from a class name by lower-casing its first letter.

    Example:
        >>> default_bean_name(HarryPotterQuoter)  # Returns "harryPotterQuoter"
    """
    name = cls.__name__
    return name[:1].lower() + name[1:]


class BeanDefinitionRegistry:
    """Registry for bean definitions, supporting registration and profile-based filtering."""

    def __init__(self):
        self._definitions: list[BeanDefinition] = []

    def register(self, definition: BeanDefinition):
        """Register a bean definition explicitly.

        Args:
            definition: The definition to be registered.
        """
        self._definitions.append(definition)

    def register_class(self, cls: type) -> type:
        """Register a class decorated with ``@component`` or ``@configuration``.

        A configuration class contributes a definition for itself and one for
        each of its ``@bean`` methods.

        Args:
            cls: The decorated class.

        Returns:
            The class, unchanged, so the method can be used as a decorator.

        Raises:
            BeanDefinitionError: If the class carries no declaration.
        """
        declaration = declaration_of(cls)
        if declaration is None:
            raise BeanDefinitionError(
                f"{cls.__name__} is not decorated with @component or @configuration"
            )

        name = declaration["name"] or default_bean_name(cls)
        profiles = declaration["profiles"]
        self.register(
            BeanDefinition(
                name,
                cls,
                depends_on=declaration["depends_on"],
                profiles=profiles,
            )
        )

        if declaration["role"] == CONFIGURATION:
            for method_name, method in inspect.getmembers(cls, inspect.isfunction):
                factory_declaration = factory_method_declaration_of(method)
                if factory_declaration is None:
                    continue
                self.register(
                    BeanDefinition(
                        factory_declaration["name"],
                        _return_type(method),
                        factory_method=method_name,
                        configuration_class=cls,
                        configuration_name=name,
                        depends_on=factory_declaration["depends_on"],
                        profiles=profiles,
                    )
                )

        logger.debug("Registered %s as bean '%s'", cls.__name__, name)
        return cls

    def definitions(self, profiles: Optional[set[str]] = None) -> dict[str, BeanDefinition]:
        """Retrieve definitions keyed by name, optionally filtered by active profiles.

        Args:
            profiles: A set of active profile names. If None, returns all definitions.

        Returns:
            The definitions whose profiles match the given profile set.

        Raises:
            BeanDefinitionError: If two selected definitions share a name.
        """
        selected = (
            self._definitions
            if profiles is None
            else [d for d in self._definitions if _profiles_match(d.profiles, profiles)]
        )

        definitions_by_name: dict[str, BeanDefinition] = {}
        for definition in selected:
            if definition.name in definitions_by_name:
                raise BeanDefinitionError(
                    f"Duplicate bean name '{definition.name}' "
                    f"for classes {definitions_by_name[definition.name].bean_class.__name__} "
                    f"and {definition.bean_class.__name__} in profiles {profiles}"
                )
            definitions_by_name[definition.name] = definition
        return definitions_by_name


def _return_type(func: Any) -> type:
    try:
        return_type = get_type_hints(func).get("return", None)
    except (NameError, TypeError) as e:
        raise BeanDefinitionError(
            f"Cannot evaluate return annotation of {func.__qualname__}: {e}"
        ) from e
    return return_type if isinstance(return_type, type) else object


def _profiles_match(stated: tuple[str, ...], selected: set[str]) -> bool:
    """Check if a definition's profile requirements match the selected profiles.

    Profile matching supports inclusion and exclusion patterns:
    - Normal profiles ("dev", "prod") must be in the selected set
    - Exclusion profiles ("!test") must NOT be in the selected set
    - Empty stated profiles match all selected profiles

    Example:
        >>> _profiles_match(("dev",), {"dev"})          # True
        >>> _profiles_match(("!test",), {"dev"})        # True
        >>> _profiles_match(("!test",), {"test"})       # False
        >>> _profiles_match(("prod",), {"dev"})         # False
    """
    provided = [p for p in stated if not p.startswith("!")]
    excluded = [p[1:] for p in stated if p.startswith("!")]

    return not any(e in selected for e in excluded) and (
        not provided or any(p in selected for p in provided)
    )
