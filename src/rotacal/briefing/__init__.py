"""Briefing requests handed to an external text generator."""

from .requests import (
    BriefingGenerator,
    BriefingRequest,
    build_briefing_request,
    daily_briefing,
    format_briefing_date,
    markdown_to_html,
)

__all__ = [
    "BriefingRequest",
    "BriefingGenerator",
    "build_briefing_request",
    "format_briefing_date",
    "markdown_to_html",
    "daily_briefing",
]
