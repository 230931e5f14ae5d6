"""Record schemas and validation rules for the three collections."""

from .records import (
    CATEGORIES,
    DIFFICULTIES,
    MOODS,
    Exercise,
    InvalidRecordError,
    JournalEntry,
    TrainingJourney,
)

__all__ = [
    "CATEGORIES",
    "DIFFICULTIES",
    "MOODS",
    "Exercise",
    "InvalidRecordError",
    "JournalEntry",
    "TrainingJourney",
]
