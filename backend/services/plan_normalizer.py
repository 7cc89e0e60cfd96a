"""Turn an untrusted model plan into a complete WorkoutPlan.

Every field the model omits, mistypes or truncates is replaced by a
deterministic default from ``services.exercise_catalog``. The derived
schedule and workout lists are fully determined by ``daysPerWeek`` and
``weeklySplit``.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timedelta, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from schemas.workout import ScheduleDay, SkillTrackLadder, WorkoutDay, WorkoutPlan
from services.exercise_catalog import (
    DEFAULT_BLOCKS,
    DEFAULT_DAYS,
    DEFAULT_WORKOUT_LENGTH,
    MAX_DAYS,
    MIN_DAYS,
    PROGRESSION_RULES,
    exercises_for_day,
    ladder_steps,
    leading_int,
    length_to_minutes,
    split_template,
    volume_targets,
)

MAX_SKILL_TRACKS = 3


class InvalidPlanOutputError(ValueError):
    """The model output could not be used as a plan object."""


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_as_text(v) for v in value]


def _non_blank(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def plan_timezone() -> ZoneInfo | None:
    """Zone named by PLAN_TIMEZONE, or None for the system zone."""
    name = os.getenv("PLAN_TIMEZONE", "").strip()
    return ZoneInfo(name) if name else None


def _localize(wall: datetime, tz: tzinfo | None) -> datetime:
    """Attach an offset to a naive wall-clock time.

    Offsets are resolved per date, so days on either side of a DST change
    each stay at local midnight. Without a zone the system zone's rules apply.
    """
    if tz is None:
        return wall.astimezone()
    return wall.replace(tzinfo=tz)


def week_day(now: datetime, index: int) -> datetime:
    """Local midnight ``index`` days after the Monday of ``now``'s week.

    A naive ``now`` is read as system local time.
    """
    monday = now.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
    monday -= timedelta(days=now.weekday())
    return _localize(monday + timedelta(days=index), now.tzinfo)


def start_of_week(now: datetime) -> datetime:
    """Most recent Monday at local midnight (Sunday goes back six days)."""
    return week_day(now, 0)


def resolve_days(candidate: dict[str, Any], profile: dict[str, Any]) -> int:
    days = (
        leading_int(candidate.get("daysPerWeek"))
        or leading_int(profile.get("daysPerWeek"))
        or DEFAULT_DAYS
    )
    return max(MIN_DAYS, min(MAX_DAYS, days))


def resolve_split(candidate: dict[str, Any], days: int) -> list[str]:
    split = _string_list(candidate.get("weeklySplit"))
    # A mismatched split is replaced wholesale, never padded or cut
    if len(split) == days:
        return split
    return split_template(days)


def normalize_plan(
    candidate: Any,
    uid: str,
    profile: dict[str, Any],
    *,
    now: datetime | None = None,
) -> WorkoutPlan:
    """Build a fully populated plan from ``candidate``.

    Args:
        candidate: Extracted model output, expected to be a JSON object.
        uid: Verified caller identifier; always becomes the plan owner.
        profile: Caller profile used for every profile-derived default.
        now: Generation time. Defaults to the current time in
            ``plan_timezone()``, or the system zone when none is set.

    Raises:
        InvalidPlanOutputError: If ``candidate`` is not an object.
    """
    if not isinstance(candidate, dict):
        raise InvalidPlanOutputError("Model did not return a valid plan object")
    if not isinstance(profile, dict):
        profile = {}
    now = now or datetime.now(plan_timezone())
    created = now if now.tzinfo else now.astimezone()

    days = resolve_days(candidate, profile)
    split = resolve_split(candidate, days)
    week_start = start_of_week(now)

    workout_length = _non_blank(candidate.get("workoutLength")) or str(
        profile.get("workoutLength") or DEFAULT_WORKOUT_LENGTH
    )
    minutes = length_to_minutes(workout_length)

    schedule_days = [
        ScheduleDay(date=week_day(now, i).isoformat(), type=day_type)
        for i, day_type in enumerate(split)
    ]
    workout_days = [
        WorkoutDay(
            date=day.date,
            type=day.type,
            estimatedMinutes=minutes,
            exercises=exercises_for_day(day.type, profile),
        )
        for day in schedule_days
    ]

    skill_track = _string_list(candidate.get("skillTrack"))[:MAX_SKILL_TRACKS]
    blocks = _string_list(candidate.get("blocks")) or list(DEFAULT_BLOCKS)

    return WorkoutPlan(
        id=_non_blank(candidate.get("id")) or f"plan_{int(created.timestamp() * 1000)}",
        userId=uid,
        createdAt=_non_blank(candidate.get("createdAt")) or created.isoformat(),
        daysPerWeek=days,
        workoutLength=workout_length,
        weeklySplit=split,
        skillTrack=skill_track,
        blocks=blocks,
        activeWeekStartDate=week_start.isoformat(),
        scheduleDays=schedule_days,
        skillTracks=[
            SkillTrackLadder(name=name, currentStep=1, ladderSteps=ladder_steps(name))
            for name in skill_track
        ],
        volumeTargets=volume_targets(profile.get("goal")),
        progressionRules=list(PROGRESSION_RULES),
        workoutDays=workout_days,
        generator=_non_blank(candidate.get("generator")) or "ai",
    )
