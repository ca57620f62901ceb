# ActionWorks - Agent Action Plugins
# Copyright (C) 2026 ActionWorks Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import os


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="actionworks",
        description="ActionWorks - Agent Action Plugins",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Override runtime data directory (default: ~/.actionworks or ACTIONWORKS_DATA_DIR)",
    )
    sub = parser.add_subparsers(dest="command")

    # ── Actions / Truncate / Persist ──────────────────────
    from cli.commands import actions_cmd

    actions_cmd.register(sub)

    return parser


def cli_main(argv: list[str] | None = None) -> None:
    from dotenv import load_dotenv

    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    # Apply --data-dir override before any command
    if args.data_dir:
        os.environ["ACTIONWORKS_DATA_DIR"] = args.data_dir

    from core.logging_config import setup_logging
    from core.paths import get_log_dir

    setup_logging(
        level=os.environ.get("ACTIONWORKS_LOG_LEVEL", "INFO"),
        log_dir=get_log_dir(),
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    cli_main()
