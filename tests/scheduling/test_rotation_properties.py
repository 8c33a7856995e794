from datetime import date, timedelta

from hypothesis import given, settings, strategies as st

from rotacal.scheduling.rotation import CyclePattern, DayStatus, ScheduleConfig, classify

patterns = st.builds(
    CyclePattern,
    on_days=st.integers(min_value=1, max_value=30),
    off_days=st.integers(min_value=1, max_value=30),
)
configs = st.builds(
    ScheduleConfig,
    anchor_date=st.dates(min_value=date(1990, 1, 1), max_value=date(2060, 12, 31)),
    pattern=patterns,
)
offsets = st.integers(min_value=0, max_value=5000)


def _base_status(day: date, config: ScheduleConfig) -> tuple[DayStatus, bool, bool] | None:
    diff = (day - config.anchor_date).days
    if diff < 0:
        return None
    day_in_cycle = diff % config.cycle_length
    if day_in_cycle < config.pattern.on_days:
        return (
            DayStatus.ON_DUTY,
            day_in_cycle == 0,
            day_in_cycle == config.pattern.on_days - 1,
        )
    return DayStatus.OFF_DUTY, False, False


def _reference_status(day: date, config: ScheduleConfig) -> DayStatus:
    """Date-based lookahead/lookbehind, evaluated without any per-offset caching."""
    base = _base_status(day, config)
    if base is None:
        return DayStatus.UNDEFINED
    if base[0] is DayStatus.ON_DUTY:
        return DayStatus.ON_DUTY
    following = _base_status(day + timedelta(days=1), config)
    preceding = _base_status(day - timedelta(days=1), config)
    if following is not None and following[0] is DayStatus.ON_DUTY and following[1]:
        return DayStatus.TRANSIT
    if preceding is not None and preceding[0] is DayStatus.ON_DUTY and preceding[2]:
        return DayStatus.TRANSIT
    return DayStatus.OFF_DUTY


@settings(max_examples=200, deadline=None)
@given(config=configs, offset=offsets)
def test_classification_is_periodic(config, offset):
    day = config.anchor_date + timedelta(days=offset)
    later = day + timedelta(days=config.cycle_length)
    assert classify(day, config) == classify(later, config)


@settings(max_examples=200, deadline=None)
@given(config=configs, offset=offsets)
def test_dates_from_anchor_have_exactly_one_status(config, offset):
    result = classify(config.anchor_date + timedelta(days=offset), config)
    assert result.status in {DayStatus.ON_DUTY, DayStatus.OFF_DUTY, DayStatus.TRANSIT}
    if result.status is not DayStatus.ON_DUTY:
        assert not (result.is_first_day_of_block or result.is_last_day_of_block)


@settings(max_examples=100, deadline=None)
@given(config=configs, days_before=st.integers(min_value=1, max_value=5000))
def test_dates_before_anchor_are_undefined(config, days_before):
    result = classify(config.anchor_date - timedelta(days=days_before), config)
    assert result.status is DayStatus.UNDEFINED
    assert result.day_in_cycle is None


@settings(max_examples=200, deadline=None)
@given(config=configs, offset=st.integers(min_value=-3, max_value=400))
def test_matches_date_based_neighbour_lookups(config, offset):
    day = config.anchor_date + timedelta(days=offset)
    assert classify(day, config).status is _reference_status(day, config)


@settings(max_examples=100, deadline=None)
@given(config=configs)
def test_one_cycle_has_on_days_on_duty(config):
    statuses = [
        classify(config.anchor_date + timedelta(days=offset), config).status
        for offset in range(config.cycle_length)
    ]
    assert statuses.count(DayStatus.ON_DUTY) == config.pattern.on_days
    expected_transit = 1 if config.pattern.off_days == 1 else 2
    assert statuses.count(DayStatus.TRANSIT) == expected_transit
