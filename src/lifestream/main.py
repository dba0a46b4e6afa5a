"""LifeStream entry point."""

import asyncio
import logging
import os
import sys

from dotenv import find_dotenv, load_dotenv

from .cli import run_cli


def main() -> None:
    """Main entry point."""
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=logging.DEBUG if os.getenv("LIFESTREAM_DEBUG") == "1" else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(sys.argv) > 1 and sys.argv[1] == "notion":
        from .notion_cli import run_notion_cli

        sys.exit(run_notion_cli(sys.argv[2:]))

    asyncio.run(run_cli())


if __name__ == "__main__":
    main()
