"""Interactive command-line interface for LifeStream."""

import os

from groq import AsyncGroq

from .config import AppConfig, config_from_env
from .entries.categories import CATEGORY_DEFINITIONS
from .entries.models import Period, TimeEntry
from .errors import ExtractionError, ReportError
from .logging import configure_logger, get_logger
from .report.stats import format_duration, top_activities
from .sync.driver import SyncOutcome
from .tracker import TimeTracker

BANNER = """
╔══════════════════════════════════════════╗
║            LifeStream v0.1.0             ║
║   Investment · Production · Expense      ║
╚══════════════════════════════════════════╝

Describe what you did and press Enter, e.g.
  "9点到10点学习编程，然后吃饭半小时"

Commands:
  /list                       - Show entries, newest first
  /stats                      - Minutes by category and activity
  /delete <id>                - Delete an entry (id prefix is enough)
  /clear                      - Delete all entries
  /sync                       - Push unsynced entries to Notion
  /report [week|month|quarter] - AI analysis of a period
  /help                       - Show this help
  /exit, /quit                - Exit
"""


class CLI:
    """Interactive loop around a TimeTracker."""

    def __init__(
        self,
        tracker: TimeTracker | None = None,
        config: AppConfig | None = None,
    ) -> None:
        if tracker is None:
            config = config or config_from_env()
            groq_client = AsyncGroq(api_key=os.getenv("GROQ_API_KEY"))
            tracker = TimeTracker(config, groq_client, event_logger=get_logger())
        self.tracker = tracker

    def _confirm(self, question: str) -> bool:
        try:
            return input(f"{question} (y/n): ").strip().lower() in ("y", "yes")
        except EOFError:
            return False

    def _format_entry(self, entry: TimeEntry) -> str:
        marker = "✓" if entry.is_synced else "·"
        line = (
            f"{marker} {entry.id[:8]}  {entry.date_str}  "
            f"{entry.category.value:<10} {entry.activity:<4} "
            f"{format_duration(entry.duration_minutes):>7}  {entry.task}"
        )
        if entry.goal_title:
            line += f"  → {entry.goal_title}"
        return line

    def _format_list(self, entries: list[TimeEntry]) -> str:
        if not entries:
            return "No entries yet. Start by describing what you did."
        ordered = sorted(entries, key=lambda e: e.timestamp, reverse=True)
        lines = [self._format_entry(entry) for entry in ordered]
        lines.append(f"\n{len(entries)} entries")
        return "\n".join(lines)

    def _format_stats(self) -> str:
        data = self.tracker.stats()
        if not data.total_minutes:
            return "No data yet."

        lines = [f"Total: {format_duration(data.total_minutes)}", ""]
        for category, minutes in data.by_category.items():
            share = minutes * 100 / data.total_minutes
            label = CATEGORY_DEFINITIONS[category].label
            lines.append(f"  {label:<20} {format_duration(minutes):>8}  {share:5.1f}%")
        lines.append("")
        lines.append("Top activities:")
        for activity, minutes in top_activities(data):
            lines.append(f"  {activity:<8} {format_duration(minutes):>8}")
        return "\n".join(lines)

    async def _add(self, text: str) -> None:
        try:
            entries = await self.tracker.add_from_text(text)
        except ExtractionError as e:
            print(f"\n❌ Could not understand that: {e}")
            self.tracker.log_error("extract", e)
            return

        if not entries:
            print("\nNo activities recognised.")
            return
        print(f"\nAdded {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
        for entry in entries:
            print("  " + self._format_entry(entry))

    def _delete(self, prefix: str) -> None:
        if not prefix:
            print("Usage: /delete <id>")
            return
        matches = self.tracker.store.find_by_prefix(prefix)
        if not matches:
            print(f"No entry with id {prefix}")
            return
        if len(matches) > 1:
            print(f"Id prefix {prefix} is ambiguous ({len(matches)} entries)")
            return
        entry = matches[0]
        if self._confirm(f"Delete '{entry.task}'?"):
            self.tracker.delete(entry.id)
            print("Deleted.")

    def _clear(self) -> None:
        if self._confirm("Delete ALL entries? This cannot be undone."):
            self.tracker.clear()
            print("All entries deleted.")

    async def _sync(self) -> None:
        result = await self.tracker.sync()
        if result.outcome is SyncOutcome.NOT_CONFIGURED:
            print(f"\n⚠ {result.message}")
            print("Run `lifestream notion set --api-key ... --records-db ...` first.")
            return
        icon = "✓" if result.outcome is SyncOutcome.COMPLETED and not result.failed else "⚠"
        print(f"\n{icon} {result.message}")

    async def _report(self, arg: str) -> None:
        name = (arg or "week").upper()
        try:
            period = Period(name)
        except ValueError:
            print("Usage: /report [week|month|quarter]")
            return

        print("\n📝 Generating report...")
        try:
            report = await self.tracker.report(period)
        except ReportError as e:
            print(f"❌ {e}")
            self.tracker.log_error("report", e)
            return
        print("\n" + "─" * 40)
        print(report)
        print("─" * 40)

    async def _handle_command(self, command: str) -> bool:
        """Handle a special command. Returns True if should continue, False to exit."""
        cmd, _, arg = command.strip().partition(" ")
        cmd = cmd.lower()
        arg = arg.strip()

        if cmd in ("/exit", "/quit", "exit", "quit"):
            print("\n👋 Goodbye!")
            return False

        if cmd == "/list":
            print(self._format_list(self.tracker.entries()))
        elif cmd == "/stats":
            print(self._format_stats())
        elif cmd == "/delete":
            self._delete(arg)
        elif cmd == "/clear":
            self._clear()
        elif cmd == "/sync":
            await self._sync()
        elif cmd == "/report":
            await self._report(arg)
        elif cmd == "/help":
            print(BANNER)
        else:
            print(f"Unknown command: {cmd}")

        return True

    async def run(self) -> None:
        """Run the interactive CLI."""
        print(BANNER)
        self.tracker.open()
        print(f"{len(self.tracker.store)} entries loaded.\n")

        try:
            while True:
                try:
                    user_input = input("you> ").strip()
                except (EOFError, KeyboardInterrupt):
                    print("\n👋 Goodbye!")
                    break

                if not user_input:
                    continue

                if user_input.startswith("/") or user_input.lower() in ("exit", "quit"):
                    if not await self._handle_command(user_input):
                        break
                    continue

                await self._add(user_input)
        finally:
            await self.tracker.close()


async def run_cli() -> None:
    """Run the CLI with configuration from the environment."""
    config = config_from_env()
    configure_logger(config.log_dir)

    if not os.getenv("GROQ_API_KEY"):
        print("❌ Error: GROQ_API_KEY environment variable not set")
        print("Please set it in your .env file or environment")
        return

    cli = CLI(config=config)
    await cli.run()
