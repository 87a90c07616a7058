import pytest

from tap_stats.core.models import ReportDescriptor, StatGroup
from tap_stats.exceptions import RegistryFrozenError
from tap_stats.reports.base import TapReport
from tap_stats.reports.registry import ReportRegistry, default_registry, stat_report


class _Dummy(TapReport):
    title = "Dummy"

    def recompute_rows(self, filter_expression: str) -> None:
        self.clear_tree()


def _factory(tag, calls):
    def factory(host, key, filter_expression, source):
        calls.append((tag, key, filter_expression))
        return _Dummy(host, key, filter_expression, source)

    return factory


def test_create_unknown_key_returns_none(host, capture):
    registry = ReportRegistry()
    assert registry.create("nope", "", host, capture) is None
    registry.register_report("Dummy", "dummy", StatGroup.GENERIC, _Dummy)
    assert registry.create("nope", "", host, capture) is None


def test_create_passes_arguments_to_factory(host, capture):
    calls = []
    registry = ReportRegistry()
    registry.register_report("Dummy", "dummy", StatGroup.GENERIC, _factory("a", calls))
    report = registry.create("dummy", 'protocol == "TCP"', host, capture)
    assert isinstance(report, _Dummy)
    assert report.key == "dummy"
    assert report.filter_expression == 'protocol == "TCP"'
    assert report.source is capture
    assert report.host is host
    assert calls == [("a", "dummy", 'protocol == "TCP"')]


def test_reregistering_replaces_factory(host, capture):
    calls = []
    registry = ReportRegistry()
    registry.register_report("Old", "dummy", StatGroup.GENERIC, _factory("old", calls))
    registry.register_report("New", "dummy", StatGroup.TELEPHONY, _factory("new", calls))
    registry.create("dummy", "", host, capture)
    assert [tag for tag, _, _ in calls] == ["new"]
    assert len(registry) == 1
    assert registry.get("dummy").title == "New"


def test_menu_listener_and_stored_init_callback(host, capture):
    seen = []
    inits = []
    registry = ReportRegistry()
    registry.add_menu_listener(lambda group, title, key: seen.append((group, title, key)))
    registry.register(
        ReportDescriptor("Dummy", "dummy", StatGroup.RESPONSE_TIME, _Dummy, init_callback=inits.append)
    )
    assert seen == [(StatGroup.RESPONSE_TIME, "Dummy", "dummy")]
    assert registry.create("dummy", "frame_number > 1", host, capture) is not None
    assert inits == []
    assert registry.get("dummy").init_callback == inits.append


def test_freeze_blocks_registration(host, capture):
    registry = ReportRegistry()
    registry.register_report("Dummy", "dummy", StatGroup.GENERIC, _Dummy)
    registry.freeze()
    assert registry.frozen
    with pytest.raises(RegistryFrozenError):
        registry.register_report("Other", "other", StatGroup.GENERIC, _Dummy)
    assert registry.create("dummy", "", host, capture) is not None
    assert "other" not in registry


def test_descriptors_are_immutable():
    registry = ReportRegistry()
    descriptor = registry.register_report("Dummy", "dummy", StatGroup.GENERIC, _Dummy)
    with pytest.raises(AttributeError):
        descriptor.key = "changed"
    assert registry.keys() == ["dummy"]
    assert registry.descriptors() == [descriptor]


def test_stat_report_decorator_registers_class(host, capture):
    registry = ReportRegistry()

    @stat_report("Decorated", "deco", StatGroup.ENDPOINT_LIST, registry=registry)
    class Decorated(TapReport):
        def recompute_rows(self, filter_expression: str) -> None:
            self.clear_tree()

    assert Decorated.title == "Decorated"
    report = registry.create("deco", "", host, capture)
    assert isinstance(report, Decorated)
    assert "deco" not in default_registry
