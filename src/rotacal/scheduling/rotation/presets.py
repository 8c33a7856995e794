"""Named rotation patterns offered as presets by the CLI."""

from __future__ import annotations

from dataclasses import dataclass

from rotacal.scheduling.rotation.models import CyclePattern


@dataclass(frozen=True)
class RotationPreset:
    """Common offshore rotation with a short description."""

    name: str
    description: str

    @property
    def pattern(self) -> CyclePattern:
        return CyclePattern.parse(self.name)


DEFAULT_PRESETS: dict[str, RotationPreset] = {
    "7/7": RotationPreset(
        name="7/7",
        description="One week on, one week off; short hitches with frequent crew changes.",
    ),
    "14/14": RotationPreset(
        name="14/14",
        description="Two weeks on, two weeks off; the most common equal-time rotation.",
    ),
    "14/21": RotationPreset(
        name="14/21",
        description="Two weeks on, three weeks off; typical of longer-haul installations.",
    ),
    "21/21": RotationPreset(
        name="21/21",
        description="Three weeks on, three weeks off.",
    ),
    "28/28": RotationPreset(
        name="28/28",
        description="Four weeks on, four weeks off; remote or international postings.",
    ),
}

DEFAULT_PATTERN = "14/14"


def get_preset(name: str) -> RotationPreset:
    key = name.strip()
    if key not in DEFAULT_PRESETS:
        available = ", ".join(list_preset_names())
        raise KeyError(f"Unknown preset '{name}'. Available: {available}")
    return DEFAULT_PRESETS[key]


def list_preset_names() -> tuple[str, ...]:
    return tuple(sorted(DEFAULT_PRESETS, key=lambda key: DEFAULT_PRESETS[key].pattern.cycle_length))


def list_presets() -> tuple[RotationPreset, ...]:
    return tuple(DEFAULT_PRESETS[key] for key in list_preset_names())


__all__ = [
    "RotationPreset",
    "DEFAULT_PRESETS",
    "DEFAULT_PATTERN",
    "get_preset",
    "list_preset_names",
    "list_presets",
]
