"""CLI entry point for stylerules."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, cast

from stylerules import __version__
from stylerules.blocks.models import GeometryType
from stylerules.editor.config import EditorConfig, load_editor_config
from stylerules.editor.models import RuleCollection, parse_intents
from stylerules.editor.session import EditorSession


def _read_json(path: Path) -> Any:
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        sys.exit(1)
    return json.loads(path.read_text(encoding="utf-8"))


def _load_config(args: argparse.Namespace) -> EditorConfig:
    config = load_editor_config(cast(Path | None, args.config))
    geometry_type = cast(str | None, args.geometry_type)
    if geometry_type:
        config.geometry_type = geometry_type
    return config


def _cmd_apply(args: argparse.Namespace) -> None:
    session = EditorSession(_load_config(args))
    rules = RuleCollection.from_rules(_read_json(cast(Path, args.rules)))
    intents = parse_intents(_read_json(cast(Path, args.intents)))
    for intent in intents:
        rules = session.dispatch(rules, intent)
    print(json.dumps(rules.to_dicts(), indent=2))


def _cmd_inspect(args: argparse.Namespace) -> None:
    session = EditorSession(_load_config(args))
    rules = RuleCollection.from_rules(_read_json(cast(Path, args.rules)))
    views = session.views(rules)
    if not views:
        print("No rules.")
        return
    for view in views:
        rule = view.rule
        label = rule.name or rule.kind or "(unnamed)"
        print(f"{view.index}. {label} [{rule.rule_id}]")
        if view.composite:
            enabled = [a.attribute for a in view.attributes if not a.disabled]
            print(f"   editor: {rule.kind} (method: {rule.method or '-'})")
            print(f"   enabled attributes: {', '.join(enabled) or '-'}")
        else:
            kinds = [s.symbolizer.kind for s in view.symbolizers]
            skipped = len(rule.symbolizers or ()) - len(kinds)
            print(f"   symbolizers: {', '.join(kinds) or '-'}")
            if skipped:
                print(f"   skipped (no block): {skipped}")
        if view.affordances.order_warning:
            print("   warning: label rule may not render in declared order")
        if not view.affordances.removable:
            print("   mandatory")


def _cmd_blocks(args: argparse.Namespace) -> None:
    session = EditorSession(_load_config(args))
    print(f"Geometry type: {session.config.geometry_type or '-'}")
    for option in session.add_options():
        state = "hidden" if not option.visible else ("disabled" if option.disabled else "enabled")
        print(f"  {option.source:<10} {option.key:<16} {state}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="stylerules",
        description="Edit and inspect cartographic style rules",
    )
    _ = parser.add_argument(
        "-V", "--version", action="version", version=f"stylerules {__version__}"
    )
    _ = parser.add_argument(
        "--config", type=Path, default=None, help="Settings file (default: ./.stylerules.json)"
    )
    _ = parser.add_argument(
        "--geometry-type",
        default=None,
        dest="geometry_type",
        choices=[g.value for g in GeometryType],
        help="Geometry type of the styled layer",
    )
    subparsers = parser.add_subparsers(dest="command")

    apply_p = subparsers.add_parser("apply", help="Apply edit intents to a rules file")
    _ = apply_p.add_argument("rules", type=Path, help="JSON file with the rule list")
    _ = apply_p.add_argument("intents", type=Path, help="JSON file with a list of intents")

    inspect_p = subparsers.add_parser("inspect", help="Show derived state for each rule")
    _ = inspect_p.add_argument("rules", type=Path, help="JSON file with the rule list")

    _ = subparsers.add_parser("blocks", help="List add options for the geometry type")

    args = parser.parse_args()
    dispatch = {
        "apply": _cmd_apply,
        "inspect": _cmd_inspect,
        "blocks": _cmd_blocks,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler is None:
        parser.print_help()
        sys.exit(1)
    try:
        handler(args)
    except (json.JSONDecodeError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
