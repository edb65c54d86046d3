"""Resolution of dependency references against a map of built beans.

A reference is resolved by explicit name when one is given, and otherwise by
type: every built bean that is an instance of the requested type is a
candidate, and exactly one candidate must remain. There is no tie-break by
declaration order or priority - ambiguity is always an error.

Beans vetoed by an interceptor are kept in the map as ``None`` and never
satisfy a reference.
"""

from typing import Any, Mapping, Optional

from beanery.domain import InjectionPoint
from beanery.errors import BeanDefinitionError, NoSuchBeanError, NoUniqueBeanError

__all__ = ["DependencyResolver", "beans_of_type"]


def beans_of_type(
    beans: Mapping[str, Any], bean_type: type, excluded_type: Optional[type] = None
) -> dict[str, Any]:
    """Select the beans assignable to ``bean_type``.

    Args:
        beans: Built beans keyed by name.
        bean_type: The requested type.
        excluded_type: A runtime type whose instances are never candidates,
            used to stop a bean from satisfying its own by-type dependency.

    Returns:
        The matching beans keyed by name, in map order.
    """
    return {
        name: bean
        for name, bean in beans.items()
        if bean is not None
        and isinstance(bean, bean_type)
        and (excluded_type is None or type(bean) is not excluded_type)
    }


class DependencyResolver:
    """Resolve references to exactly one bean, or fail."""

    def resolve(self, point: InjectionPoint, owner: Any, beans: Mapping[str, Any]) -> Any:
        """Resolve the bean to be injected into ``owner`` at ``point``.

        Args:
            point: The injection point being filled.
            owner: The bean declaring the injection point.
            beans: Built beans keyed by name.

        Returns:
            The resolved bean.

        Raises:
            NoSuchBeanError: If nothing matches the name or type.
            NoUniqueBeanError: If more than one bean matches the type.
            BeanDefinitionError: If the point has neither a name nor a usable type.
        """
        if point.qualifier:
            return self.resolve_by_name(beans, point.qualifier)
        if point.declared_type is None:
            raise BeanDefinitionError(
                f"Field '{type(owner).__name__}.{point.field_name}' has no type "
                "usable for injection; give the Inject marker a bean name"
            )
        return self.resolve_by_type(beans, point.declared_type, type(owner))

    def resolve_by_name(self, beans: Mapping[str, Any], name: str) -> Any:
        if name not in beans:
            raise NoSuchBeanError(name)
        bean = beans[name]
        if bean is None:
            raise NoSuchBeanError(name, "bean was vetoed by an interceptor")
        return bean

    def resolve_by_type(
        self,
        beans: Mapping[str, Any],
        requested_type: type,
        excluded_type: Optional[type] = None,
    ) -> Any:
        candidates = beans_of_type(beans, requested_type, excluded_type)
        if len(candidates) == 0:
            raise NoSuchBeanError(requested_type)
        if len(candidates) > 1:
            raise NoUniqueBeanError(requested_type, sorted(candidates))
        return next(iter(candidates.values()))
