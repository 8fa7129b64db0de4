"""
Static exercise lists used when the catalog is unreachable.

Keyed by goal. Goals without a list of their own get the general
fitness one.
"""

from typing import Optional, Union

from ..clients.models import Goal
from .models import SuggestedExercise

FALLBACK_EXERCISES: dict[Goal, list[SuggestedExercise]] = {
    Goal.WEIGHT_LOSS: [
        SuggestedExercise("Jumping Jacks", "Full body cardio exercise. Jump while spreading legs and raising arms overhead."),
        SuggestedExercise("Burpees", "High-intensity exercise combining squat, plank, and jump."),
        SuggestedExercise("Mountain Climbers", "Core and cardio exercise in plank position with alternating knee drives."),
        SuggestedExercise("High Knees", "Running in place while lifting knees to hip level."),
        SuggestedExercise("Jump Rope", "Classic cardio exercise for endurance and coordination."),
    ],
    Goal.MUSCLE_GAIN: [
        SuggestedExercise("Push-ups", "Upper body exercise targeting chest, shoulders, and triceps."),
        SuggestedExercise("Squats", "Lower body exercise for quadriceps, hamstrings, and glutes."),
        SuggestedExercise("Lunges", "Unilateral leg exercise for strength and balance."),
        SuggestedExercise("Plank", "Isometric core exercise for stability and strength."),
        SuggestedExercise("Dumbbell Rows", "Back exercise targeting lats and biceps."),
    ],
    Goal.GENERAL_FITNESS: [
        SuggestedExercise("Walking", "Low-impact cardio for overall health and endurance."),
        SuggestedExercise("Stretching", "Flexibility exercises for mobility and injury prevention."),
        SuggestedExercise("Bodyweight Squats", "Functional movement for lower body strength."),
        SuggestedExercise("Plank Hold", "Core stability exercise for posture and strength."),
        SuggestedExercise("Arm Circles", "Shoulder mobility and warm-up exercise."),
    ],
}

DEFAULT_FALLBACK_GOAL = Goal.GENERAL_FITNESS


def get_fallback_exercises(goal: Union[Goal, str, None]) -> list[SuggestedExercise]:
    """Fallback list for a goal; unknown or missing goals get the default list."""
    if isinstance(goal, str):
        try:
            goal = Goal(goal)
        except ValueError:
            goal = None

    exercises = FALLBACK_EXERCISES.get(goal) if goal is not None else None
    if exercises is None:
        exercises = FALLBACK_EXERCISES[DEFAULT_FALLBACK_GOAL]
    return list(exercises)
