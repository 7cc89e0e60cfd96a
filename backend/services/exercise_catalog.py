"""Static lookup tables used to fill in whatever the model leaves out.

Split templates are keyed by days per week, volume targets by goal, and
exercises by day-type keyword. Nothing here is mutated at runtime; callers
get fresh model instances on every lookup.
"""

from __future__ import annotations

import re
from typing import Any

from schemas.workout import Exercise, VolumeTarget

MIN_DAYS = 2
MAX_DAYS = 6
DEFAULT_DAYS = 4
DEFAULT_WORKOUT_LENGTH = "25-35"

SPLIT_TEMPLATES: dict[int, tuple[str, ...]] = {
    2: ("Full Body + Skills", "Full Body + Mobility"),
    3: ("Push + Skill", "Pull + Skill", "Legs + Core"),
    4: ("Push", "Pull", "Legs + Core", "Skill Focus"),
    5: ("Push", "Pull", "Legs + Core", "Skill Focus", "Conditioning + Mobility"),
    6: (
        "Push",
        "Pull",
        "Legs + Core",
        "Skill Focus",
        "Volume Strength",
        "Mobility + Recovery",
    ),
}

DEFAULT_BLOCKS: tuple[str, ...] = (
    "Strength block",
    "Skill progression",
    "Mobility / prehab",
    "Recovery targets",
)

PROGRESSION_RULES: tuple[str, ...] = (
    "If all prescribed reps are met for 2 sessions, increase progression by 1 step.",
    "If RPE > 9 for 2 sessions, deload by reducing one set.",
    "If workout day is missed and adaptation is enabled, reshuffle remaining sessions.",
)

LADDER_SUFFIXES: tuple[str, ...] = ("Foundation", "Capacity", "Strength", "Control")

# (category, target, unit)
STRENGTH_VOLUME: tuple[tuple[str, int, str], ...] = (
    ("Push", 12, "sets"),
    ("Pull", 12, "sets"),
    ("Legs", 10, "sets"),
    ("Core", 10, "sets"),
    ("Skill practice", 4, "sessions"),
    ("Mobility", 3, "sessions"),
)

MOBILITY_VOLUME: tuple[tuple[str, int, str], ...] = (
    ("Mobility", 5, "sessions"),
    ("Skill practice", 3, "sessions"),
    ("Core", 6, "sets"),
)

# (substring, minutes), first match wins
LENGTH_BUCKETS: tuple[tuple[str, int], ...] = (
    ("15-20", 20),
    ("25-35", 32),
    ("60+", 60),
)
DEFAULT_MINUTES = 48

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def leading_int(value: Any) -> int | None:
    """Parse the leading integer of ``value``'s text form, or None."""
    if value is None or isinstance(value, bool):
        return None
    match = _LEADING_INT.match(str(value))
    return int(match.group()) if match else None


def split_template(days: int) -> list[str]:
    days = max(MIN_DAYS, min(MAX_DAYS, days))
    return list(SPLIT_TEMPLATES[days])


def length_to_minutes(workout_length: Any) -> int:
    value = str(workout_length or "")
    for needle, minutes in LENGTH_BUCKETS:
        if needle in value:
            return minutes
    return DEFAULT_MINUTES


def volume_targets(goal: Any) -> list[VolumeTarget]:
    table = MOBILITY_VOLUME if "mobility" in str(goal or "").lower() else STRENGTH_VOLUME
    return [
        VolumeTarget(category=category, target=target, completed=0, unit=unit)
        for category, target, unit in table
    ]


def ladder_steps(name: str) -> list[str]:
    return [f"{name} {suffix}" for suffix in LADDER_SUFFIXES]


def _has_no_equipment(profile: dict[str, Any]) -> bool:
    equipment = profile.get("equipment")
    if not isinstance(equipment, list):
        return False
    return any("none" in str(item).lower() for item in equipment)


def _pull_is_zero(profile: dict[str, Any]) -> bool:
    return leading_int(profile.get("baselinePull")) == 0


def _first_skill(profile: dict[str, Any]) -> str:
    skills = profile.get("skills")
    if isinstance(skills, list) and skills:
        return str(skills[0])
    return "Handstand"


def _pull_day(profile: dict[str, Any]) -> list[Exercise]:
    pull_zero = _pull_is_zero(profile)
    assisted = pull_zero or _has_no_equipment(profile)
    return [
        Exercise(
            id="pull_focus",
            name="Band-Assisted Row" if assisted else "Strict Pull-Up",
            category="pull",
            progressionLevel=1 if pull_zero else 3,
            sets=4,
            reps="6-8" if pull_zero else "5-7",
            restSeconds=120,
            altExercises=["Ring Row", "Inverted Row"],
        ),
        Exercise(
            id="pull_accessory",
            name="Scapular Pull-Up",
            category="pull",
            progressionLevel=2,
            sets=3,
            reps="10",
            restSeconds=90,
            altExercises=["Band Pulldown"],
        ),
    ]


def _legs_day(profile: dict[str, Any]) -> list[Exercise]:
    return [
        Exercise(
            id="leg_focus",
            name="Bulgarian Split Squat",
            category="legs",
            progressionLevel=3,
            sets=4,
            reps="8/side",
            restSeconds=90,
            altExercises=["Reverse Lunge"],
        ),
        Exercise(
            id="core_finish",
            name="Hollow Hold",
            category="core",
            progressionLevel=2,
            sets=4,
            reps="25s",
            restSeconds=60,
            altExercises=["Dead Bug"],
        ),
    ]


def _skill_day(profile: dict[str, Any]) -> list[Exercise]:
    return [
        Exercise(
            id="skill_focus",
            name=f"{_first_skill(profile)} Progression",
            category="skill",
            progressionLevel=2,
            sets=5,
            reps="20s",
            restSeconds=75,
            altExercises=["Wall Drill"],
        ),
        Exercise(
            id="skill_support",
            name="Scapular Stability Drill",
            category="skill",
            progressionLevel=2,
            sets=3,
            reps="10",
            restSeconds=60,
            altExercises=["Band Pull-Apart"],
        ),
    ]


def _mobility_day(profile: dict[str, Any]) -> list[Exercise]:
    return [
        Exercise(
            id="mobility_flow",
            name="Shoulder CARs",
            category="mobility",
            progressionLevel=2,
            sets=3,
            reps="8",
            restSeconds=40,
            altExercises=["Wall Slides"],
        ),
        Exercise(
            id="spine_flow",
            name="Thoracic Rotation Flow",
            category="mobility",
            progressionLevel=2,
            sets=3,
            reps="8/side",
            restSeconds=40,
            altExercises=["Open Book"],
        ),
    ]


def _push_day(profile: dict[str, Any]) -> list[Exercise]:
    return [
        Exercise(
            id="push_focus",
            name="Deficit Push-Up" if _has_no_equipment(profile) else "Ring Dip",
            category="push",
            progressionLevel=3,
            sets=4,
            reps="6-8",
            restSeconds=105,
            altExercises=["Bench Dip", "Elevated Push-Up"],
        ),
        Exercise(
            id="push_accessory",
            name="Pseudo Planche Push-Up",
            category="push",
            progressionLevel=3,
            sets=3,
            reps="8",
            restSeconds=90,
            altExercises=["Incline Push-Up"],
        ),
    ]


# Order matters: "Pull + Skill" is a pull day, "Legs + Core" never reaches skill
_DAY_BUILDERS = (
    ("pull", _pull_day),
    ("legs", _legs_day),
    ("skill", _skill_day),
    ("mobility", _mobility_day),
)


def exercises_for_day(day_type: Any, profile: dict[str, Any]) -> list[Exercise]:
    """Pick the exercise pair for a day-type label; push is the fallback."""
    lower = str(day_type or "").lower()
    for keyword, builder in _DAY_BUILDERS:
        if keyword in lower:
            return builder(profile)
    return _push_day(profile)
