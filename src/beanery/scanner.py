"""Discovery of decorated classes within a package."""

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Iterator, Optional

from beanery.decorators import declaration_of
from beanery.domain import BeanDefinition
from beanery.registry import BeanDefinitionRegistry

__all__ = ["scan", "scan_into"]

logger = logging.getLogger(__name__)


def scan(package_name: str, profiles: Optional[set[str]] = None) -> dict[str, BeanDefinition]:
    """Collect bean definitions for every decorated class in a package.

    The package and all of its submodules are imported. Only classes defined in
    the scanned modules are considered, so re-exported classes are seen once.

    Args:
        package_name: Dotted name of the package (or module) to scan.
        profiles: An optional set of active profile names used to filter definitions.

    Returns:
        The bean definitions keyed by name.

    Raises:
        ValueError: If the package name is empty.
        BeanDefinitionError: If two active definitions share a name.
    """
    registry = BeanDefinitionRegistry()
    scan_into(registry, package_name)
    return registry.definitions(profiles)


def scan_into(registry: BeanDefinitionRegistry, package_name: str) -> BeanDefinitionRegistry:
    """Register every decorated class found in a package with ``registry``."""
    if package_name is None:
        raise TypeError("Package name must not be None")
    if not package_name.strip():
        raise ValueError("Package is empty! Please specify the package name.")

    found = 0
    for module in _modules(package_name.strip()):
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ == module.__name__ and declaration_of(cls) is not None:
                registry.register_class(cls)
                found += 1

    logger.debug("Scanned package %s and found %d declarations", package_name, found)
    return registry


def _modules(package_name: str) -> Iterator[ModuleType]:
    package = importlib.import_module(package_name)
    yield package

    if not hasattr(package, "__path__"):
        return
    submodules = pkgutil.walk_packages(package.__path__, prefix=f"{package.__name__}.")
    for module_info in sorted(submodules, key=lambda info: info.name):
        yield importlib.import_module(module_info.name)
