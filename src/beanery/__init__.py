"""Beanery inversion-of-control container.

Beanery builds an object graph from declared components, wires dependencies
between them by type or by explicit name, and lets interceptors inspect,
replace or veto every bean before it is handed out. Modelled on Spring's
annotation-driven application context, it keeps the wiring rules small and
strict: a by-type dependency must match exactly one bean, and ambiguity is
always an error.

Key Features:
    - Declarative components, configurations and factory methods
    - Field injection declared with ``Annotated[T, Inject()]``
    - Injection by unique type or by explicit bean name
    - Interceptor chain with veto (short-circuit) semantics
    - Package scanning with profile filtering

Basic Usage:
    >>> from typing import Annotated
    >>> from beanery import ApplicationContext, Inject, component
    >>>
    >>> @component()
    ... class HarryPotterQuoter(Quoter):
    ...     def quote(self):
    ...         return "It does not do to dwell on dreams and forget to live."
    >>>
    >>> @component()
    ... class HarryPotter:
    ...     quoter: Annotated[Quoter, Inject()] = None
    >>>
    >>> context = ApplicationContext("books")
    >>> context.get_bean("harryPotter").quoter.quote()

The framework consists of several core modules:
    - decorators: Component, configuration and factory-method declarations
    - registry: Turning declarations into bean definitions
    - scanner: Package scanning
    - factory: Building, intercepting and injecting beans
    - resolver: Resolving dependencies by name or type
    - interceptors: The interceptor chain
    - context: Application-facing bean lookup
    - domain: Core domain models (BeanDefinition, Inject, InjectionPoint)
    - errors: Framework-specific exceptions
"""

import logging

from beanery.context import ApplicationContext
from beanery.decorators import bean, component, configuration
from beanery.domain import BeanDefinition, Inject, InjectionPoint
from beanery.errors import (
    BeanDefinitionError,
    BeanError,
    BeanInjectionError,
    BeanInstantiationError,
    NoSuchBeanError,
    NoUniqueBeanError,
)
from beanery.factory import BeanFactory
from beanery.interceptors import BeanInterceptor, InterceptorChain
from beanery.registry import BeanDefinitionRegistry
from beanery.resolver import DependencyResolver
from beanery.scanner import scan

__all__ = [
    "ApplicationContext",
    "BeanDefinition",
    "BeanDefinitionError",
    "BeanDefinitionRegistry",
    "BeanError",
    "BeanFactory",
    "BeanInjectionError",
    "BeanInstantiationError",
    "BeanInterceptor",
    "DependencyResolver",
    "Inject",
    "InjectionPoint",
    "InterceptorChain",
    "NoSuchBeanError",
    "NoUniqueBeanError",
    "bean",
    "component",
    "configuration",
    "scan",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
