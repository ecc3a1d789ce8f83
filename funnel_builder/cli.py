from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from funnel_builder.config import configure_logging
from funnel_builder.examples import example_funnel_payload
from funnel_builder.renderer import render_page
from funnel_builder.services.rules import lint
from funnel_builder.services.serialization import loads_funnel


def _load(path: str):
    result = loads_funnel(Path(path).read_text(encoding="utf-8"))
    if not result.success:
        print(f"{path}: invalid funnel", file=sys.stderr)
        for message in result.messages():
            print(f"  {message}", file=sys.stderr)
    return result


def _cmd_validate(args: argparse.Namespace) -> int:
    result = _load(args.file)
    if not result.success:
        return 1
    print(f"{args.file}: ok ({len(result.value.blocks)} blocks)")
    return 0


def _cmd_lint(args: argparse.Namespace) -> int:
    result = _load(args.file)
    if not result.success:
        return 1
    report = lint(result.value)
    print(json.dumps(report.model_dump(), indent=2))
    return 0 if report.valid else 1


def _cmd_render(args: argparse.Namespace) -> int:
    result = _load(args.file)
    if not result.success:
        return 1
    html = render_page(result.value)
    if args.output:
        Path(args.output).write_text(html, encoding="utf-8")
        print(f"Rendered {len(result.value.blocks)} blocks to {args.output}")
    else:
        print(html)
    return 0


def _cmd_example(args: argparse.Namespace) -> int:
    print(json.dumps(example_funnel_payload(), indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="funnel-builder", description="Validate, lint and render funnel documents.")
    parser.add_argument("--log-level", type=str, default=None, help="Override LOG_LEVEL for this run.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Structurally validate a funnel JSON file.")
    validate_parser.add_argument("file", help="Path to the funnel JSON file.")
    validate_parser.set_defaults(handler=_cmd_validate)

    lint_parser = subparsers.add_parser("lint", help="Run best-practice rules over a funnel JSON file.")
    lint_parser.add_argument("file", help="Path to the funnel JSON file.")
    lint_parser.set_defaults(handler=_cmd_lint)

    render_parser = subparsers.add_parser("render", help="Render a funnel JSON file to HTML.")
    render_parser.add_argument("file", help="Path to the funnel JSON file.")
    render_parser.add_argument("--output", "-o", type=str, default=None, help="Write HTML here instead of stdout.")
    render_parser.set_defaults(handler=_cmd_render)

    example_parser = subparsers.add_parser("example", help="Print the sample funnel payload.")
    example_parser.set_defaults(handler=_cmd_example)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level.upper() if args.log_level else None)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
