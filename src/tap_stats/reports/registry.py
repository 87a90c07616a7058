from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Type

from ..core.models import InitCallback, ReportDescriptor, ReportFactory, StatGroup
from ..exceptions import RegistryFrozenError
from ..logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imports for annotations only
    from ..datasource import CaptureSource
    from ..host import HostContext
    from .base import TapReport

logger = get_logger(__name__)

MenuListener = Callable[[StatGroup, str, str], None]


class ReportRegistry:
    """Map report keys to the factories that build them.

    Reports are registered while the application starts up; :meth:`freeze`
    ends that phase and lookups are read-only afterwards.
    """

    def __init__(self) -> None:
        self._descriptors: Dict[str, ReportDescriptor] = {}
        self._menu_listeners: List[MenuListener] = []
        self._frozen = False

    def add_menu_listener(self, listener: MenuListener) -> None:
        """Call ``listener(group, title, key)`` for every registration."""
        self._menu_listeners.append(listener)

    def register(self, descriptor: ReportDescriptor) -> None:
        """Insert ``descriptor``, replacing any report with the same key."""
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{descriptor.key}' after startup",
                suggestion="Register all reports before the first lookup.",
            )
        if descriptor.key in self._descriptors:
            logger.debug("Replacing report registered as %s", descriptor.key)
            # Re-insert so iteration order follows the latest registration.
            del self._descriptors[descriptor.key]
        self._descriptors[descriptor.key] = descriptor
        logger.debug("Registered report %s (%s)", descriptor.key, descriptor.title)
        for listener in self._menu_listeners:
            listener(descriptor.group, descriptor.title, descriptor.key)

    def register_report(
        self,
        title: str,
        key: str,
        group: StatGroup,
        factory: ReportFactory,
        init_callback: Optional[InitCallback] = None,
    ) -> ReportDescriptor:
        descriptor = ReportDescriptor(
            title=title, key=key, group=group, factory=factory, init_callback=init_callback
        )
        self.register(descriptor)
        return descriptor

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, key: str) -> Optional[ReportDescriptor]:
        return self._descriptors.get(key)

    def create(
        self,
        key: str,
        filter_expression: str,
        host: "HostContext",
        source: "CaptureSource",
    ) -> Optional["TapReport"]:
        """Build the report registered as ``key``.

        Returns ``None`` for unknown keys; telling the user is up to the
        caller.
        """
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            logger.debug("No report registered as %s", key)
            return None
        return descriptor.factory(host, key, filter_expression, source)

    def descriptors(self) -> List[ReportDescriptor]:
        return list(self._descriptors.values())

    def keys(self) -> List[str]:
        return list(self._descriptors)

    def __contains__(self, key: object) -> bool:
        return key in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


default_registry = ReportRegistry()


def stat_report(
    title: str,
    key: str,
    group: StatGroup = StatGroup.GENERIC,
    *,
    registry: Optional[ReportRegistry] = None,
) -> Callable[[Type["TapReport"]], Type["TapReport"]]:
    """Class decorator registering a :class:`TapReport` subclass."""

    def decorator(report_cls: Type["TapReport"]) -> Type["TapReport"]:
        if not report_cls.title:
            report_cls.title = title
        target = registry if registry is not None else default_registry
        target.register_report(title, key, group, report_cls)
        return report_cls

    return decorator
