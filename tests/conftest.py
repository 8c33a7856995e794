from datetime import date

import pytest

from rotacal.scheduling.rotation import ScheduleConfig

ANCHOR = date(2024, 1, 1)


@pytest.fixture
def anchor() -> date:
    return ANCHOR


@pytest.fixture
def config_3_2() -> ScheduleConfig:
    return ScheduleConfig.from_strings(ANCHOR, "3/2")


@pytest.fixture
def config_14_14() -> ScheduleConfig:
    return ScheduleConfig.from_strings(ANCHOR, "14/14")
