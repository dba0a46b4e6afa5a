"""Natural-language time report generation using an LLM."""

import logging

from groq import AsyncGroq

from ..entries.categories import category_context
from ..entries.models import Period, TimeEntry
from ..errors import ReportError

logger = logging.getLogger(__name__)

REPORT_PROMPT = """You are a high-level productivity consultant.
Analyze the following time logs for a {period} period.

The Philosophy:
- Investment: Improves quality of life long-term.
- Production: Creates direct value.
- Expense: Maintenance costs of living.

Data:
{summary}

{context}

Task:
Provide a concise but deep analysis in Markdown format.
1. **Overview**: Brief summary of how time was spent.
2. **Balance Analysis**: Are they spending too much on Expense? Is Investment sufficient?
3. **Pattern Recognition**: Point out any good or bad habits visible in the logs.
4. **Recommendations**: Give 3 specific, actionable tips to improve their structure based on this data.

Keep the tone professional, encouraging, and insightful. Use Chinese language for the response.
"""


def _clock(instant: str) -> str:
    """HH:MM part of an ISO instant, as written."""
    _, _, time_part = instant.partition("T")
    return time_part[:5]


def summary_line(entry: TimeEntry) -> str:
    """Compact one-line rendering of an entry for the prompt."""
    return (
        f"{entry.date_str} {_clock(entry.start_time)}-{_clock(entry.end_time)}: "
        f"{entry.task} [{entry.activity}] ({entry.category.value}) - "
        f"{entry.duration_minutes}分钟"
    )


class ReportGenerator:
    """Writes a Markdown analysis of how time was spent."""

    def __init__(
        self,
        llm_client: AsyncGroq,
        model: str = "llama-3.1-70b-versatile",
    ) -> None:
        self.client = llm_client
        self.model = model

    def build_prompt(self, entries: list[TimeEntry], period: Period) -> str:
        summary = "\n".join(summary_line(entry) for entry in entries)
        return REPORT_PROMPT.format(
            period=period.value,
            summary=summary,
            context=category_context(),
        )

    async def generate(self, entries: list[TimeEntry], period: Period) -> str:
        """Generate the report for entries of one period.

        Raises:
            ReportError: If the LLM call fails or returns nothing.
        """
        prompt = self.build_prompt(entries, period)

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logger.error("Report generation failed: %s", e)
            raise ReportError(f"LLM call failed: {e}") from e

        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise ReportError("LLM returned an empty report")
        return content
