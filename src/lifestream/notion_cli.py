"""CLI commands for managing the Notion connection.

Provides subcommands for showing, setting, and clearing the settings.
"""

import argparse
import sys

from .config import config_from_env
from .notion.config import (
    NotionConfig,
    clear_notion_config,
    load_notion_config,
    save_notion_config,
)
from .storage import LocalStorage


def _get_storage() -> LocalStorage:
    """Open the local storage named by the environment."""
    return LocalStorage(config_from_env().data_dir)


def cmd_show(args: argparse.Namespace) -> int:
    """Show the saved Notion settings with the key masked."""
    config = load_notion_config(_get_storage())
    if config is None:
        print("Notion is not configured.")
        return 0

    shown = config.masked()
    print("\nNotion settings")
    print("-" * 40)
    print(f"API key:           {shown['api_key'] or '(not set)'}")
    print(f"Records database:  {shown['records_database_id'] or '(not set)'}")
    print(f"Goals database:    {shown['goals_database_id'] or '(not set, goal matching off)'}")
    print(f"Proxy URL:         {shown['proxy_url'] or '(direct)'}")

    missing = config.missing_for_sync()
    if missing:
        print(f"\nSync disabled, missing: {', '.join(missing)}")
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    """Update one or more Notion settings."""
    storage = _get_storage()
    config = load_notion_config(storage) or NotionConfig()

    if args.api_key is not None:
        config.api_key = args.api_key.strip()
    if args.records_db is not None:
        config.records_database_id = args.records_db.strip()
    if args.goals_db is not None:
        config.goals_database_id = args.goals_db.strip()
    if args.proxy_url is not None:
        config.proxy_url = args.proxy_url.strip() or None

    save_notion_config(storage, config)
    print("Notion settings saved.")
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    """Forget the Notion settings."""
    clear_notion_config(_get_storage())
    print("Notion settings cleared.")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the notion CLI."""
    parser = argparse.ArgumentParser(
        prog="lifestream notion",
        description="Manage the Notion connection",
    )

    subparsers = parser.add_subparsers(dest="command", help="Sub-command help")

    subparsers.add_parser("show", help="Show current settings")

    set_parser = subparsers.add_parser("set", help="Update settings")
    set_parser.add_argument("--api-key", help="Notion integration token")
    set_parser.add_argument("--records-db", help="Records database id")
    set_parser.add_argument("--goals-db", help="Goals database id (empty disables matching)")
    set_parser.add_argument("--proxy-url", help="Relay URL (empty for direct access)")

    subparsers.add_parser("clear", help="Forget all settings")

    return parser


def run_notion_cli(argv: list[str] | None = None) -> int:
    """Run the notion CLI with given arguments.

    Args:
        argv: Command-line arguments. Uses sys.argv[1:] if None.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "show": cmd_show,
        "set": cmd_set,
        "clear": cmd_clear,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(run_notion_cli())
