from datetime import date, timedelta

import pytest

from rotacal.briefing import (
    BriefingRequest,
    build_briefing_request,
    daily_briefing,
    format_briefing_date,
    markdown_to_html,
)
from rotacal.core.errors import RotacalValueError
from rotacal.scheduling.rotation import classify


def _request_for(offset: int, config, anchor) -> BriefingRequest:
    day = anchor + timedelta(days=offset)
    return build_briefing_request(day, classify(day, config))


def test_format_briefing_date():
    assert format_briefing_date(date(2024, 1, 1)) == "Monday, January 1"
    assert format_briefing_date("2024-03-09") == "Saturday, March 9"


def test_on_duty_requests_depend_on_block_position(config_14_14, anchor):
    assert "Hitch Start Checklist" in _request_for(0, config_14_14, anchor).user_query
    assert "Daily Focus" in _request_for(5, config_14_14, anchor).user_query
    last = _request_for(13, config_14_14, anchor)
    assert "Crossover Checklist" in last.user_query
    assert not last.use_search_grounding


def test_single_day_block_prefers_hitch_start(anchor):
    from rotacal.scheduling.rotation import ScheduleConfig

    config = ScheduleConfig.from_strings(anchor, "1/6")
    assert "Hitch Start Checklist" in _request_for(0, config, anchor).user_query


def test_transit_request(config_14_14, anchor):
    request = _request_for(14, config_14_14, anchor)
    assert "Travel Day Checklist" in request.user_query
    assert "travel day" in request.system_instruction
    assert "Monday, January 15" in request.user_query


def test_off_duty_request_uses_search_grounding(config_14_14, anchor):
    request = _request_for(20, config_14_14, anchor)
    assert request.use_search_grounding
    assert "on leave" in request.user_query


def test_pre_anchor_day_has_no_briefing(config_14_14, anchor):
    with pytest.raises(RotacalValueError):
        _request_for(-1, config_14_14, anchor)


def test_markdown_to_html():
    html = markdown_to_html("## Checklist\n* **Passport**\n* Tickets\n\nSafe travels")
    assert html.startswith("<h2>Checklist</h2>")
    assert "<ul><li><strong>Passport</strong></li><li>Tickets</li></ul>" in html
    assert "</p><p>Safe travels" in html


def test_markdown_to_html_third_level_heading():
    assert markdown_to_html("### Sources") == "<h3>Sources</h3>"


class _RecordingGenerator:
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.requests: list[BriefingRequest] = []

    def generate(self, request: BriefingRequest) -> str:
        self.requests.append(request)
        return self.reply


def test_daily_briefing_passes_request_to_generator(config_14_14, anchor):
    generator = _RecordingGenerator("## Travel\n* Pack")
    html = daily_briefing(anchor + timedelta(days=27), config_14_14, generator)
    assert html == "<h2>Travel</h2><br/><ul><li>Pack</li></ul>"
    assert len(generator.requests) == 1
    assert "Travel Day Checklist" in generator.requests[0].user_query
