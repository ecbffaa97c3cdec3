"""A minimal service container for resolving action handlers."""

import threading
from typing import Any, Callable, Optional


class ServiceContainer:
    """Maps descriptors (usually classes) to factories.

    Example::

        container = ServiceContainer()
        container.add(GreetingHandler)
        container.add(Mailer, lambda c: Mailer(host="localhost"), singleton=True)
        handler = container.get_service(GreetingHandler)
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._factories: dict[Any, Callable[["ServiceContainer"], Any]] = {}
        self._singletons: set[Any] = set()
        self._instances: dict[Any, Any] = {}

    def add(
        self,
        descriptor: Any,
        factory: Optional[Callable[["ServiceContainer"], Any]] = None,
        singleton: bool = False,
    ) -> None:
        """Registers how to build instances for ``descriptor``.

        Args:
            descriptor: Key the service is requested by.
            factory: Callable receiving the container. Defaults to calling
                ``descriptor`` with no arguments.
            singleton: Whether to build the instance once and reuse it.
        """
        if factory is None:
            if not callable(descriptor):
                raise ValueError(f"{descriptor!r} is not callable; a factory is required.")

            def factory(_container, _descriptor=descriptor):
                return _descriptor()

        with self._lock:
            self._factories[descriptor] = factory
            self._instances.pop(descriptor, None)
            if singleton:
                self._singletons.add(descriptor)
            else:
                self._singletons.discard(descriptor)

    def get_service(self, descriptor: Any) -> Optional[Any]:
        """Returns an instance for ``descriptor``, or None if it is unknown."""
        factory = self._factories.get(descriptor)
        if factory is None:
            return None
        if descriptor not in self._singletons:
            return factory(self)

        with self._lock:
            if descriptor not in self._instances:
                self._instances[descriptor] = factory(self)
            return self._instances[descriptor]

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._factories
