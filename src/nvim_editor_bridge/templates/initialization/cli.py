"""Command line interface for the Neovim editor bridge."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ...atoms.errors.application_errors import BaseApplicationError
from ...atoms.logging.logger import configure_logging, get_logger
from ...organisms.preferences.store import JsonPreferenceStore
from ...pages.application.nvim_code_editor import NvimCodeEditor, create_editor
from ...templates.configuration.configuration_system import get_config
from ...templates.servers.server import serve

EDITABLE_SETTINGS = (
    "server_cmd",
    "server_args",
    "client_cmd",
    "client_args",
    "remote_cmd",
    "remote_args",
    "handled_extensions",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nvim-editor-bridge",
        description="Open files from a host editor in a headless Neovim server",
    )
    parser.add_argument("--preferences", type=str, default=None, help="Preferences file (default: from configuration)")
    parser.add_argument("--config", type=str, default=None, help="JSON or YAML configuration file")
    parser.add_argument("--log-dir", type=str, default=None, help="Directory for the log file")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    open_parser = subparsers.add_parser("open", help="Open a file at a line and column")
    open_parser.add_argument("path", nargs="?", default="", help="File to open (omit to open the project root)")
    open_parser.add_argument("--line", type=int, default=1, help="Target line (default: 1)")
    open_parser.add_argument("--column", type=int, default=0, help="Target column (default: 0)")
    open_parser.add_argument("--cwd", type=str, default=".", help="Workspace directory (default: .)")

    endpoint_parser = subparsers.add_parser("endpoint", help="Show the workspace endpoint and whether it is live")
    endpoint_parser.add_argument("--cwd", type=str, default=".", help="Workspace directory (default: .)")

    config_parser = subparsers.add_parser("config", help="Show or change editor settings")
    config_subparsers = config_parser.add_subparsers(dest="config_command", required=True)
    config_subparsers.add_parser("show", help="Print the current settings as JSON")
    set_parser = config_subparsers.add_parser("set", help="Change one setting")
    set_parser.add_argument("key", choices=EDITABLE_SETTINGS)
    set_parser.add_argument("value")
    config_subparsers.add_parser("reset", help="Reset server, client and remote commands to defaults")

    serve_parser = subparsers.add_parser("serve", help="Run the MCP server over stdio")
    serve_parser.add_argument("--cwd", type=str, default=".", help="Workspace directory (default: .)")

    return parser


def _build_editor(args: argparse.Namespace, preferences_path: Path) -> NvimCodeEditor:
    working_directory = Path(getattr(args, "cwd", ".")).resolve()
    return create_editor(store=JsonPreferenceStore(preferences_path), working_directory=working_directory)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the nvim-editor-bridge command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    if args.config:
        try:
            config.load_from_file(args.config)
        except (OSError, ValueError) as e:
            print(f"Error: could not load configuration: {e}", file=sys.stderr)
            return 1

    log_dir = Path(args.log_dir) if args.log_dir else config.log_directory()
    verbose = args.verbose or bool(config.get("logging", "verbose"))
    level = logging.DEBUG if args.verbose else config.logging_level()
    configure_logging(level=level, log_dir=log_dir, verbose=verbose)
    logger = get_logger(__name__)

    if config.validate():
        logger.warning("Continuing with invalid configuration values")

    preferences_path = Path(args.preferences).expanduser() if args.preferences else config.preferences_path()

    cwd = getattr(args, "cwd", None)
    if cwd is not None and not Path(cwd).is_dir():
        print(f"Error: Working directory '{cwd}' not found.", file=sys.stderr)
        return 1

    editor = _build_editor(args, preferences_path)

    if args.command == "open":
        result = editor.open_file(args.path, args.line, args.column)
        if not result.accepted:
            print(f"Error: not opening '{args.path}': unsupported extension or missing file", file=sys.stderr)
            return 1
        for error in result.errors:
            print(f"Error: {error}", file=sys.stderr)
        return 0 if result.success else 1

    if args.command == "endpoint":
        endpoint = editor.orchestrator.current_endpoint()
        running = editor.orchestrator.prober.probe(endpoint)
        print(json.dumps({"endpoint": endpoint, "running": running}))
        return 0

    if args.command == "config":
        try:
            if args.config_command == "set":
                editor.update_settings(**{args.key: args.value})
            elif args.config_command == "reset":
                editor.reset_arguments()
        except (BaseApplicationError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(json.dumps(editor.settings_snapshot(), indent=2))
        return 0

    if args.command == "serve":
        try:
            asyncio.run(serve(editor))
        except KeyboardInterrupt:
            logger.info("Server interrupted. Exiting.")
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 2
