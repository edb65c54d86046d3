from typing import Union

__all__ = [
    "BeanError",
    "BeanDefinitionError",
    "BeanInstantiationError",
    "NoSuchBeanError",
    "NoUniqueBeanError",
    "BeanInjectionError",
]


class BeanError(Exception):
    """Base class for every error raised while building or querying a container."""

    pass


class BeanDefinitionError(BeanError):
    """Raised when bean definitions are inconsistent or collide by name."""

    pass


class BeanInstantiationError(BeanError):
    """Raised when a constructor or factory method fails to produce a bean."""

    def __init__(self, bean_name: str, message: str):
        super().__init__(f"Could not instantiate bean '{bean_name}': {message}")
        self.bean_name = bean_name


class NoSuchBeanError(BeanError):
    """Raised when a lookup by name or by type finds no candidate."""

    def __init__(self, key: Union[str, type], reason: str = "no bean found"):
        super().__init__(f"No such bean {_describe(key)}: {reason}")
        self.key = key


class NoUniqueBeanError(BeanError):
    """Raised when a lookup by type finds more than one candidate."""

    def __init__(self, bean_type: type, candidates: list[str]):
        super().__init__(
            f"No unique bean of type {_describe(bean_type)}: "
            f"expected a single match but found {len(candidates)}: {candidates}"
        )
        self.bean_type = bean_type
        self.candidates = candidates


class BeanInjectionError(BeanError):
    """Raised when a resolved bean cannot be assigned to its target field."""

    def __init__(self, source_type: type, target_type: type, field_name: str):
        super().__init__(
            f"Unable to inject '{source_type.__name__}' "
            f"into '{target_type.__name__}.{field_name}'"
        )
        self.source_type = source_type
        self.target_type = target_type
        self.field_name = field_name


def _describe(key: Union[str, type]) -> str:
    if isinstance(key, str):
        return f"'{key}'"
    return getattr(key, "__name__", str(key))
