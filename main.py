from __future__ import annotations

import argparse
import logging
from pathlib import Path

from roadmap_ui.timeline import (
    TIMEFRAME_OPTIONS,
    LayoutConfig,
    TimelineRenderConfig,
    ViewState,
    compute_layout,
    export_timeline_bundle,
    load_records,
    render_timeline_ascii,
    select_timeframe,
    validate_layout_suite,
    view_layout_config,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="roadmap-timeline")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Print an ASCII Gantt of a records JSON file.")
    render.add_argument("records", type=Path)
    _add_layout_arguments(render)
    render.add_argument("--title", default="Roadmap timeline")
    render.add_argument("--out", type=Path, default=None, help="Write to a file instead of stdout.")

    export = sub.add_parser("export", help="Write ASCII/Markdown/PNG artifacts for a records JSON file.")
    export.add_argument("records", type=Path)
    export.add_argument("--out-dir", type=Path, required=True)
    export.add_argument("--prefix", default="roadmap_timeline")
    _add_layout_arguments(export)
    export.add_argument("--title", default="Roadmap timeline")

    check = sub.add_parser("validate", help="Check layout invariants for a records JSON file.")
    check.add_argument("records", type=Path)
    _add_layout_arguments(check)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    records = load_records(args.records)
    config = _resolve_layout_config(args.zoom, args.px_per_day)

    if args.command == "render":
        text = render_timeline_ascii(compute_layout(records, config), TimelineRenderConfig(title=args.title))
        if args.out is None:
            print(text, end="")
        else:
            args.out.parent.mkdir(parents=True, exist_ok=True)
            args.out.write_text(text, encoding="utf-8")
            print(args.out)
        return 0

    if args.command == "export":
        bundle = export_timeline_bundle(
            records,
            out_dir=args.out_dir,
            prefix=args.prefix,
            config=config,
            render_config=TimelineRenderConfig(title=args.title),
        )
        for key, value in bundle.as_dict().items():
            print(f"{key}: {value}")
        return 0

    if args.command == "validate":
        report = validate_layout_suite(records, config)
        for warning in report.warnings:
            print(f"warning: {warning}")
        for error in report.errors:
            print(f"error: {error}")
        print("ok" if report.ok else "failed")
        return 0 if report.ok else 1

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_layout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--zoom", choices=[option.value for option in TIMEFRAME_OPTIONS], default=None)
    parser.add_argument("--px-per-day", type=int, default=None, help="Overrides --zoom.")


def _resolve_layout_config(zoom: str | None, px_per_day: int | None) -> LayoutConfig:
    if zoom is None and px_per_day is None:
        return LayoutConfig()
    config = view_layout_config(select_timeframe(ViewState(), zoom or ""))
    if px_per_day is not None:
        return LayoutConfig.from_options(
            {
                "px_per_day": px_per_day,
                "min_item_width_px": config.min_item_width_px,
                "label_character_px": config.label_character_px,
                "label_padding_px": config.label_padding_px,
                "max_overflow_days": config.max_overflow_days,
            }
        )
    return config


if __name__ == "__main__":
    raise SystemExit(main())
