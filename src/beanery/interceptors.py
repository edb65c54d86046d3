"""Interceptors applied to every bean as it is constructed.

An interceptor may hand back the bean unchanged, replace it with another
object, or return ``None`` to veto it. A veto stops the chain for that bean:
interceptors registered after the vetoing one never see it.
"""

import logging
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

__all__ = ["BeanInterceptor", "InterceptorChain"]

logger = logging.getLogger(__name__)


@runtime_checkable
class BeanInterceptor(Protocol):
    """Hook invoked on every newly built bean before it is considered finished."""

    def before_initialization(self, bean: Any, bean_name: str) -> Optional[Any]:
        """Return the bean, a replacement for it, or ``None`` to stop the chain."""
        ...


class InterceptorChain:
    """Ordered, append-only collection of :class:`BeanInterceptor` objects."""

    def __init__(self, interceptors: Iterable[BeanInterceptor] = ()):
        self._interceptors: list[BeanInterceptor] = []
        for interceptor in interceptors:
            self.append(interceptor)

    def append(self, interceptor: BeanInterceptor) -> "InterceptorChain":
        if not isinstance(interceptor, BeanInterceptor):
            raise TypeError(
                f"{interceptor!r} does not implement before_initialization(bean, bean_name)"
            )
        self._interceptors.append(interceptor)
        return self

    def __iter__(self):
        return iter(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)

    def apply(self, bean: Any, bean_name: str) -> Optional[Any]:
        """Run the interceptors over a bean in registration order.

        Args:
            bean: The freshly constructed bean.
            bean_name: The name the bean is declared under.

        Returns:
            The bean as left by the last interceptor, or ``None`` if an
            interceptor vetoed it.
        """
        result = bean
        for interceptor in self._interceptors:
            result = interceptor.before_initialization(result, bean_name)
            if result is None:
                logger.info(
                    "Interceptor %s returned None for bean '%s', "
                    "all subsequent interceptors will be skipped",
                    type(interceptor).__name__,
                    bean_name,
                )
                break
        return result
