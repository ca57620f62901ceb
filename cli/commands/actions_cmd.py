# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0

"""CLI commands for inspecting actions and running their building blocks."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the actions, truncate and persist subcommands."""
    p_actions = subparsers.add_parser(
        "actions", help="List registered actions and whether their gates pass",
    )
    p_actions.add_argument(
        "-j", "--json", action="store_true", dest="as_json",
        help="Output as JSON",
    )
    p_actions.set_defaults(func=cmd_actions)

    p_trunc = subparsers.add_parser(
        "truncate", help="Bound text to a token budget (reads FILE or stdin)",
    )
    p_trunc.add_argument("file", nargs="?", default=None, help="Input file (default: stdin)")
    p_trunc.add_argument(
        "--max-tokens", type=int, default=None,
        help="Token budget (default: web_search.max_tokens from config)",
    )
    p_trunc.add_argument(
        "--model", default=None,
        help="Model whose encoding counts tokens (default: web_search.model_encoding)",
    )
    p_trunc.set_defaults(func=cmd_truncate)

    p_persist = subparsers.add_parser(
        "persist", help="Save a base64 payload or image URL as a PNG artifact",
    )
    p_persist.add_argument(
        "image",
        help="Base64 data (optionally a data URI), a file containing it, or an http(s) URL",
    )
    p_persist.add_argument(
        "--output-dir", default=None,
        help="Output directory (default: image_generation.output_dir from config)",
    )
    p_persist.add_argument(
        "--index", type=int, default=0, help="Batch index used in the file name",
    )
    p_persist.set_defaults(func=cmd_persist)


def cmd_actions(args: argparse.Namespace) -> None:
    """List actions with similes and gate status."""
    from core.actions import ACTIONS, ConfigSettingsSource

    source = ConfigSettingsSource()
    rows = []
    for action in ACTIONS.values():
        rows.append({
            "name": action.name,
            "description": action.description,
            "similes": list(action.similes),
            "enabled": action.gate.can_run(source),
        })

    if args.as_json:
        print(json.dumps(rows, ensure_ascii=False, indent=2))
        return

    for row in rows:
        status = "enabled" if row["enabled"] else "disabled (no credentials)"
        print(f"{row['name']:<16} {status}")
        print(f"  {row['description']}")
        print(f"  similes: {', '.join(row['similes'])}")


def cmd_truncate(args: argparse.Namespace) -> None:
    """Print input text bounded to the token budget."""
    from core.actions.truncation import truncate_to_max_tokens
    from core.config import load_config

    config = load_config().web_search
    max_tokens = args.max_tokens if args.max_tokens is not None else config.max_tokens
    if max_tokens <= 0:
        print("Error: --max-tokens must be positive", file=sys.stderr)
        sys.exit(1)
    model = args.model or config.model_encoding

    if args.file:
        try:
            text = Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            print(f"Error: Cannot read {args.file}: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    sys.stdout.write(truncate_to_max_tokens(text, max_tokens=max_tokens, model=model))


def cmd_persist(args: argparse.Namespace) -> None:
    """Persist one image and print the saved path."""
    from core.actions.persistence import ArtifactStore, make_base_name
    from core.config import load_config
    from core.exceptions import ArtifactError

    output_dir = args.output_dir or load_config().image_generation.output_dir
    image = _read_image_argument(args.image)
    store = ArtifactStore(output_dir)

    try:
        path = asyncio.run(store.persist(image, make_base_name(args.index)))
    except ArtifactError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(path)


def _read_image_argument(value: str) -> str:
    """Return the image payload; a path to an existing file is read as text."""
    if value.startswith("http"):
        return value
    candidate = Path(value).expanduser()
    try:
        if candidate.is_file():
            return candidate.read_text(encoding="utf-8").strip()
    except OSError:
        # Too long to be a path, treat as payload
        logger.debug("Image argument is not a readable path")
    return value
