"""
Module for turning bean definitions into a map of wired bean instances.

The build runs in a fixed order:

1. Plain components are constructed with their zero-argument constructors.
2. Configuration-declared beans are produced by calling factory methods on
   the already-built configuration instances.
3. Every new bean passes through the interceptor chain before it is stored.
4. Fields marked with :class:`~beanery.domain.Inject` are filled on every bean.
5. Fields whose type is named in a definition's ``depends_on`` list are filled.

Any failure aborts the whole build; there is no partially built result.
"""

import inspect
import logging
from typing import Any, Iterable, Mapping, Optional

from beanery.domain import BeanDefinition, InjectionPoint
from beanery.errors import (
    BeanDefinitionError,
    BeanInjectionError,
    BeanInstantiationError,
    NoSuchBeanError,
)
from beanery.injection import annotated_fields, injection_points, type_names
from beanery.interceptors import BeanInterceptor, InterceptorChain
from beanery.resolver import DependencyResolver

__all__ = ["BeanFactory"]

logger = logging.getLogger(__name__)


class BeanFactory:
    """Build and wire beans from a mapping of :class:`BeanDefinition` objects."""

    def __init__(
        self,
        interceptors: Iterable[BeanInterceptor] = (),
        resolver: Optional[DependencyResolver] = None,
    ):
        self._interceptors = InterceptorChain(interceptors)
        self._resolver = resolver or DependencyResolver()

    @property
    def interceptors(self) -> InterceptorChain:
        return self._interceptors

    def build(self, definitions: Mapping[str, BeanDefinition]) -> dict[str, Any]:
        """Instantiate, intercept and inject every defined bean.

        Args:
            definitions: Bean definitions keyed by bean name.

        Returns:
            The built beans keyed by name. A bean vetoed by an interceptor is
            present with the value ``None``.

        Raises:
            BeanDefinitionError: If a definition is keyed under a name other than its own.
            BeanInstantiationError: If a constructor or factory method fails.
            NoSuchBeanError: If a configuration bean or dependency is missing.
            NoUniqueBeanError: If a by-type dependency is ambiguous.
            BeanInjectionError: If a resolved bean cannot be assigned.
        """
        _validate_names(definitions)

        component_beans: dict[str, Any] = {}
        for definition in definitions.values():
            if not definition.is_factory_bean:
                component_beans[definition.name] = self._create_component_bean(definition)

        configuration_beans: dict[str, Any] = {}
        for definition in definitions.values():
            if definition.is_factory_bean:
                configuration_beans[definition.name] = self._create_configuration_bean(
                    definition, component_beans
                )

        beans = {**component_beans, **configuration_beans}

        self._inject_fields(beans)
        self._inject_dependencies(definitions, beans)

        logger.debug("Built %d beans", len(beans))
        return beans

    def _create_component_bean(self, definition: BeanDefinition) -> Any:
        try:
            bean = definition.bean_class()
        except Exception as e:
            raise BeanInstantiationError(
                definition.name,
                f"{definition.bean_class.__name__} should have a zero-argument constructor "
                f"that succeeds ({e})",
            ) from e

        logger.debug("Created bean '%s' of type %s", definition.name, type(bean).__name__)
        return self._interceptors.apply(bean, definition.name)

    def _create_configuration_bean(
        self, definition: BeanDefinition, component_beans: Mapping[str, Any]
    ) -> Any:
        configuration_name = definition.configuration_name
        if configuration_name not in component_beans:
            raise NoSuchBeanError(
                configuration_name,
                f"configuration declaring bean '{definition.name}' was not built",
            )
        configuration = component_beans[configuration_name]
        if configuration is None:
            raise NoSuchBeanError(
                configuration_name,
                f"configuration declaring bean '{definition.name}' was vetoed by an interceptor",
            )

        try:
            factory_method = getattr(configuration, definition.factory_method)
            args, kwargs = _default_arguments(factory_method)
            bean = factory_method(*args, **kwargs)
        except Exception as e:
            raise BeanInstantiationError(
                definition.name,
                f"factory method {definition.configuration_class.__name__}."
                f"{definition.factory_method} failed ({e})",
            ) from e

        logger.debug(
            "Created bean '%s' from factory method %s.%s",
            definition.name,
            configuration_name,
            definition.factory_method,
        )
        return self._interceptors.apply(bean, definition.name)

    def _inject_fields(self, beans: dict[str, Any]):
        """Fill every field marked with ``Inject`` on every bean."""
        for bean in beans.values():
            if bean is None:
                continue
            for point in injection_points(type(bean)):
                self._inject(bean, point, beans)

    def _inject_dependencies(
        self, definitions: Mapping[str, BeanDefinition], beans: dict[str, Any]
    ):
        """Fill the fields whose types are listed in a definition's ``depends_on``."""
        for definition in definitions.values():
            if not definition.depends_on:
                continue
            bean = beans[definition.name]
            if bean is None:
                continue

            listed = set(definition.depends_on)
            for point in annotated_fields(type(bean)):
                if type_names(point.declared_type) & listed:
                    self._inject(bean, point, beans)

    def _inject(self, bean: Any, point: InjectionPoint, beans: dict[str, Any]):
        dependency = self._resolver.resolve(point, bean, beans)
        try:
            setattr(bean, point.field_name, dependency)
        except (AttributeError, TypeError) as e:
            raise BeanInjectionError(type(dependency), type(bean), point.field_name) from e

        logger.debug(
            "Injected %s into %s.%s",
            type(dependency).__name__,
            type(bean).__name__,
            point.field_name,
        )


def _validate_names(definitions: Mapping[str, BeanDefinition]):
    mismatched = [
        key for key, definition in definitions.items() if key != definition.name
    ]
    if mismatched:
        raise BeanDefinitionError(
            f"Definitions registered under keys {mismatched} carry different bean names"
        )


def _default_arguments(func) -> tuple[list[Any], dict[str, Any]]:
    """Build call arguments supplying ``None`` for every parameter without a default."""
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for parameter in inspect.signature(func).parameters.values():
        if parameter.default is not inspect.Parameter.empty:
            continue
        if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
            args.append(None)
        elif parameter.kind in (
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.KEYWORD_ONLY,
        ):
            kwargs[parameter.name] = None
    return args, kwargs
