import argparse
import sys
from pathlib import Path

from .controllers import RecomputeController
from .core.config import settings
from .core.models import ExportFormat
from .datasource import CaptureSource
from .exceptions import TapStatsError
from .export import ExportController
from .host import HostContext
from .reports import (
    ReportRegistry,
    default_registry,
    load_registry_config,
    register_builtin_reports,
)


def build_registry(config_path=None) -> ReportRegistry:
    """Populate a registry at startup and close it for registration."""
    registry = ReportRegistry()
    register_builtin_reports(registry)
    for descriptor in default_registry.descriptors():
        registry.register(descriptor)
    if config_path:
        load_registry_config(config_path, registry)
    registry.freeze()
    return registry


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Capture statistics reports")
    parser.add_argument("--reports-config", help="YAML or JSON file with extra report registrations")
    sub = parser.add_subparsers(dest="cmd", required=True)
    sub.add_parser("list", help="list available reports")
    export_cmd = sub.add_parser("export", help="compute a report and export it")
    export_cmd.add_argument("report", help="report key, see 'list'")
    export_cmd.add_argument("capture", help="packet records as CSV")
    export_cmd.add_argument("-f", "--filter", default="", help="display filter expression")
    export_cmd.add_argument(
        "--format",
        default=settings.default_export_format,
        choices=[fmt.value for fmt in ExportFormat],
    )
    export_cmd.add_argument("-o", "--output", help="output file; stdout when omitted")
    args = parser.parse_args(argv)

    try:
        registry = build_registry(args.reports_config)
    except (OSError, ValueError) as exc:
        print(f"Cannot load report configuration: {exc}", file=sys.stderr)
        return 1

    if args.cmd == "list":
        for descriptor in registry.descriptors():
            print(f"{descriptor.key:<12} {descriptor.title}")
        return 0

    host = HostContext(show_warning=lambda title, msg: print(f"{title}: {msg}", file=sys.stderr))
    try:
        source = CaptureSource.from_csv(Path(args.capture))
    except OSError as exc:
        print(f"Cannot read {args.capture}: {exc}", file=sys.stderr)
        return 1
    report = registry.create(args.report, args.filter, host, source)
    if report is None:
        print(f"Unknown report '{args.report}'", file=sys.stderr)
        return 2

    controller = RecomputeController(report)
    controller.set_display_filter(args.filter)
    try:
        controller.show()
    except TapStatsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    fmt = ExportFormat(args.format)
    if args.output is None:
        sys.stdout.write(report.as_bytes(fmt).decode(settings.encoding))
        return 0
    written = ExportController(report).save_as(args.output, fmt)
    return 0 if written is not None else 1


if __name__ == "__main__":
    sys.exit(main())
