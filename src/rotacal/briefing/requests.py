"""Daily briefing requests for an externally hosted text generator.

Only the request text and the post-processing of the reply live here. The generator itself is
injected through :class:`BriefingGenerator`; no network client ships with rotacal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from rotacal.core.errors import RotacalValueError
from rotacal.scheduling.rotation.engine import classify
from rotacal.scheduling.rotation.models import (
    DateLike,
    DayClassification,
    DayStatus,
    ScheduleConfig,
    as_calendar_date,
)

__all__ = [
    "BriefingRequest",
    "BriefingGenerator",
    "format_briefing_date",
    "build_briefing_request",
    "markdown_to_html",
    "daily_briefing",
]

_MARKDOWN_NOTE = "Generate a concise, helpful daily briefing in Markdown format. Ensure lists are properly formatted."


@dataclass(frozen=True, slots=True)
class BriefingRequest:
    """Prompt pair sent to the text generator.

    ``use_search_grounding`` asks the generator to consult web search (leave days only, where
    local events are relevant).
    """

    system_instruction: str
    user_query: str
    use_search_grounding: bool = False


class BriefingGenerator(Protocol):
    """External text generator returning Markdown for a request."""

    def generate(self, request: BriefingRequest) -> str: ...


def format_briefing_date(day: DateLike) -> str:
    """Format as ``"Monday, January 1"``."""
    value = as_calendar_date(day)
    return f"{value:%A}, {value:%B} {value.day}"


def build_briefing_request(day: DateLike, classification: DayClassification) -> BriefingRequest:
    """Choose the briefing prompt for ``day`` from its classification.

    Raises
    ------
    RotacalValueError
        If the day is before the schedule anchor (``undefined``).
    """
    formatted = format_briefing_date(day)
    status = classification.status

    if status is DayStatus.ON_DUTY:
        query = f"For {formatted}, which is an on-duty day, provide a briefing. "
        if classification.is_first_day_of_block:
            query += (
                'It\'s the first day of the hitch, so give me a "Hitch Start Checklist" '
                "with at least 4 important items."
            )
        elif classification.is_last_day_of_block:
            query += (
                'It\'s the crossover day, so create a "Crossover Checklist" with at least '
                "4 items for a smooth handover."
            )
        else:
            query += (
                'Provide a "Daily Focus" with a suggested task, a relevant safety reminder, '
                "and one motivational quote."
            )
        return BriefingRequest(
            system_instruction=f"You are an assistant for a rotational worker. {_MARKDOWN_NOTE}",
            user_query=query,
        )

    if status is DayStatus.TRANSIT:
        return BriefingRequest(
            system_instruction=(
                f"You are an assistant for a rotational worker on a travel day. {_MARKDOWN_NOTE}"
            ),
            user_query=(
                f'For {formatted}, which is a travel day for my rotation, provide a "Travel Day '
                'Checklist". Include items like checking travel documents, confirming '
                "flight/transport details, packing last-minute essentials, and a reminder to "
                "notify family of travel plans."
            ),
        )

    if status is DayStatus.OFF_DUTY:
        return BriefingRequest(
            system_instruction=(
                "You are a helpful life coach for a rotational worker on leave. "
                f"Use web search for timely information. {_MARKDOWN_NOTE}"
            ),
            user_query=(
                f"I am a rotational worker on leave in my hometown. For today, {formatted}, "
                "suggest one local activity or event happening today, one productive personal "
                "task, and one idea for relaxation."
            ),
            use_search_grounding=True,
        )

    raise RotacalValueError(f"No briefing for {formatted}: the date is before the schedule start")


def markdown_to_html(markdown: str) -> str:
    """Convert the generator's limited Markdown (headings, bullets, bold, breaks) to HTML."""
    html = re.sub(r"^### (.*)$", r"<h3>\1</h3>", markdown, flags=re.MULTILINE)
    html = re.sub(r"^## (.*)$", r"<h2>\1</h2>", html, flags=re.MULTILINE)
    html = re.sub(r"^\* (.*)$", r"<li>\1</li>", html, flags=re.MULTILINE)
    html = re.sub(r"\*\*(.*?)\*\*", r"<strong>\1</strong>", html)
    html = re.sub(r"(\r\n|\n){2,}", "</p><p>", html)
    html = re.sub(r"\r\n|\n", "<br/>", html)
    html = html.replace("</li><br/>", "</li>")
    html = re.sub(r"((?:<li>.*?</li>)+)", r"<ul>\1</ul>", html, flags=re.DOTALL)
    return html


def daily_briefing(day: DateLike, config: ScheduleConfig, generator: BriefingGenerator) -> str:
    """Classify ``day``, ask ``generator`` for a briefing and return it as HTML."""
    request = build_briefing_request(day, classify(day, config))
    return markdown_to_html(generator.generate(request))
