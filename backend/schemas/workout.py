from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class GeneratePlanRequest(BaseModel):
    # Untyped on purpose: a missing or non-object profile is a 400, not a 422
    profile: Any = None


class Exercise(BaseModel):
    id: str
    name: str
    category: str
    progressionLevel: int
    sets: int
    reps: str
    restSeconds: int
    altExercises: list[str]


class ScheduleDay(BaseModel):
    date: str
    type: str
    status: str = "scheduled"


class WorkoutDay(BaseModel):
    date: str
    type: str
    estimatedMinutes: int
    status: str = "scheduled"
    exercises: list[Exercise]


class SkillTrackLadder(BaseModel):
    name: str
    currentStep: int = 1
    ladderSteps: list[str]


class VolumeTarget(BaseModel):
    category: str
    target: int
    completed: int = 0
    unit: str


class WorkoutPlan(BaseModel):
    id: str
    userId: str
    createdAt: str
    daysPerWeek: int
    workoutLength: str
    weeklySplit: list[str]
    skillTrack: list[str]
    blocks: list[str]
    activeWeekStartDate: str
    scheduleDays: list[ScheduleDay]
    skillTracks: list[SkillTrackLadder]
    volumeTargets: list[VolumeTarget]
    progressionRules: list[str]
    workoutDays: list[WorkoutDay]
    generator: str = "ai"


class PlanResponse(BaseModel):
    plan: WorkoutPlan
