"""
Application-facing lookup over a fully built set of beans.

An :class:`ApplicationContext` scans a package (or takes ready-made
definitions), runs the :class:`~beanery.factory.BeanFactory` once and then
answers lookups by name and by type. Lookups by type use the same matching
rule as dependency resolution: a single-result lookup fails when no bean or
more than one bean matches.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from beanery.domain import BeanDefinition
from beanery.errors import NoSuchBeanError
from beanery.factory import BeanFactory
from beanery.interceptors import BeanInterceptor
from beanery.resolver import DependencyResolver, beans_of_type
from beanery.scanner import scan

__all__ = ["ApplicationContext", "BeanKey"]

logger = logging.getLogger(__name__)


BeanKey = Union[str, type]
"""Type alias for keys used to look up beans in an ApplicationContext.

Beans can be retrieved either by their name or by a type they are an
instance of.

Example:
    >>> context["harryPotterQuoter"]   # Lookup by name
    >>> context[Quoter]                # Lookup by type
"""


class ApplicationContext:
    """
    A container of built beans, resolved from a set of bean definitions.

    Example:
        >>> context = ApplicationContext("books.quoters")
        >>> book = context.get_bean("harryPotter")
        >>> quoter = context.get_bean(Quoter)
    """

    def __init__(
        self,
        package_name: Optional[str] = None,
        *,
        definitions: Optional[Mapping[str, BeanDefinition]] = None,
        interceptors: Iterable[BeanInterceptor] = (),
        profiles: Optional[set[str]] = None,
    ):
        """Build the context.

        Args:
            package_name: Package to scan for decorated classes.
            definitions: Ready-made definitions, used instead of scanning.
            interceptors: Interceptors applied, in order, to every new bean.
            profiles: Active profiles used to filter scanned definitions.

        Raises:
            ValueError: If neither or both of ``package_name`` and ``definitions``
                are given, or the package name is empty.
            BeanError: If the build fails.
        """
        if (package_name is None) == (definitions is None):
            raise ValueError("Give exactly one of a package name or bean definitions")
        if definitions is None:
            definitions = scan(package_name, profiles)

        self._definitions = dict(definitions)
        self._resolver = DependencyResolver()
        self._beans = BeanFactory(interceptors).build(self._definitions)
        logger.info("Application context started with %d beans", len(self._beans))

    @property
    def definitions(self) -> dict[str, BeanDefinition]:
        return dict(self._definitions)

    def bean_names(self) -> list[str]:
        return list(self._beans)

    def get_bean(self, key: BeanKey, bean_type: Optional[type] = None) -> Any:
        """Look up a single bean by name or by type.

        Args:
            key: A bean name, or a type with exactly one matching bean.
            bean_type: When looking up by name, the type the bean must have.

        Raises:
            NoSuchBeanError: If no bean matches.
            NoUniqueBeanError: If a type lookup matches more than one bean.
        """
        if isinstance(key, str):
            bean = self._resolver.resolve_by_name(self._beans, key)
            if bean_type is not None and not isinstance(bean, bean_type):
                raise NoSuchBeanError(
                    key, f"bean is a {type(bean).__name__}, not a {bean_type.__name__}"
                )
            return bean

        return self._resolver.resolve_by_type(self._beans, key)

    def get_beans(self, bean_type: type) -> dict[str, Any]:
        """Return every bean that is an instance of ``bean_type``, keyed by name."""
        return beans_of_type(self._beans, bean_type)

    def __getitem__(self, key: BeanKey) -> Any:
        return self.get_bean(key)

    def __contains__(self, key: BeanKey) -> bool:
        if isinstance(key, str):
            return self._beans.get(key) is not None
        return len(beans_of_type(self._beans, key)) > 0
