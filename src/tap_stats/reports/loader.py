from __future__ import annotations

import json
from importlib import import_module
from pathlib import Path
from typing import Any, Optional

import yaml

from ..core.models import StatGroup
from ..logging import get_logger
from .registry import ReportRegistry, default_registry

logger = get_logger(__name__)


def load_registry_config(path: str | Path, registry: Optional[ReportRegistry] = None) -> ReportRegistry:
    """Register the reports listed in a YAML or JSON configuration file.

    The file holds a ``reports`` list; each entry names a ``title``, a
    ``key``, an optional ``group`` and the dotted path of its ``factory``
    (a :class:`~tap_stats.reports.base.TapReport` subclass or any callable
    with the factory signature)::

        reports:
          - title: Destination Ports
            key: ports
            group: endpoint_list
            factory: tap_stats.reports.builtin.PortReport
    """
    registry = registry if registry is not None else default_registry
    config_path = Path(path)
    with config_path.open("r", encoding="utf-8") as fh:
        suffix = config_path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            config = yaml.safe_load(fh) or {}
        elif suffix == ".json":
            config = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported configuration file format: '{config_path.suffix}'. "
                "Supported formats are YAML (.yaml, .yml) and JSON (.json)."
            )

    for item in config.get("reports", []):
        title, key, factory_path = item.get("title"), item.get("key"), item.get("factory")
        for field_name, value in (("title", title), ("key", key), ("factory", factory_path)):
            if not isinstance(value, str) or not value:
                raise ValueError(f"Invalid or missing '{field_name}' for report entry: {item}")
        try:
            group = StatGroup(item.get("group", StatGroup.GENERIC.value))
        except ValueError as e:
            raise ValueError(f"Unknown group '{item.get('group')}' for report '{key}'") from e
        registry.register_report(title, key, group, _load_object(factory_path))
    logger.info("Loaded %d report registrations from %s", len(config.get("reports", [])), config_path)
    return registry


def _load_object(path: str) -> Any:
    module_name, _, attr = path.rpartition(".")
    try:
        module = import_module(module_name)
    except ModuleNotFoundError as e:
        raise ValueError(f"Failed to import module '{module_name}' for factory '{path}': {e}") from e
    try:
        obj = getattr(module, attr)
    except AttributeError as e:
        raise ValueError(f"Failed to find '{attr}' in module '{module_name}' for factory '{path}': {e}") from e
    if not callable(obj):
        raise ValueError(f"Factory '{path}' is not callable")
    return obj
