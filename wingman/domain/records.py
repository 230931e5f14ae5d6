"""Typed records for exercises, journal entries and training journeys.

Stored payloads keep the camelCase keys written by the mobile client
(``shortDescription``, ``exerciseId``...). Each record converts to and from
that payload shape. The schema is checked on construction and again by
``validate()`` before a record is encoded, so nothing the store cannot decode
is ever written; ``from_payload`` additionally rejects unknown or incomplete
shapes with ``InvalidRecordError``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping

CATEGORIES = frozenset({"self-practice", "social-practice"})
DIFFICULTIES = frozenset({"beginner", "intermediate", "advanced"})
MOODS = frozenset({1, 2, 3, 4, 5})


class InvalidRecordError(ValueError):
    """Raised when a record or payload does not match the schema."""


def _require_mapping(payload: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidRecordError(f"{kind} must be an object, got {type(payload).__name__}")
    return payload


def _check_keys(payload: Mapping[str, Any], expected: tuple[str, ...], kind: str) -> None:
    missing = [k for k in expected if k not in payload]
    if missing:
        raise InvalidRecordError(f"{kind} missing fields: {', '.join(missing)}")
    unknown = sorted(set(payload) - set(expected))
    if unknown:
        raise InvalidRecordError(f"{kind} has unknown fields: {', '.join(unknown)}")


def _check_str(value: Any, name: str) -> None:
    if not isinstance(value, str):
        raise InvalidRecordError(f"{name} must be a string")


def _check_id(value: Any, name: str) -> None:
    _check_str(value, name)
    if not value:
        raise InvalidRecordError(f"{name} must not be empty")


def _check_str_list(value: Any, name: str) -> None:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidRecordError(f"{name} must be a list of strings")


def _check_mood(value: Any) -> None:
    # bool is an int subclass and 4.0 == 4; neither is a valid mood
    if type(value) is not int or value not in MOODS:
        raise InvalidRecordError("JournalEntry.mood must be an integer from 1 to 5")


def _check_timestamp(value: Any, name: str) -> None:
    if not isinstance(value, datetime):
        raise InvalidRecordError(f"{name} must be a datetime")
    if value.tzinfo is None:
        raise InvalidRecordError(f"{name} must carry a UTC offset")


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing ``Z`` or no offset at all means UTC."""
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str) or not value:
        raise InvalidRecordError("timestamp must be an ISO-8601 string")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError as exc:
        raise InvalidRecordError(f"invalid timestamp: {value!r}") from exc


def parse_calendar_date(value: Any) -> date:
    """Parse ``YYYY-MM-DD``; full timestamps written by older clients keep their date part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        raise InvalidRecordError("date must be an ISO-8601 string")
    if len(value) == 10:
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise InvalidRecordError(f"invalid date: {value!r}") from exc
    return parse_timestamp(value).date()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Exercise:
    id: str
    title: str
    short_description: str
    description: str
    category: str
    difficulty: str
    tags: list[str]

    KIND = "Exercise"
    FIELDS = ("id", "title", "shortDescription", "description", "category", "difficulty", "tags")

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _check_id(self.id, "Exercise.id")
        _check_str(self.title, "Exercise.title")
        _check_str(self.short_description, "Exercise.shortDescription")
        _check_str(self.description, "Exercise.description")
        _check_str(self.category, "Exercise.category")
        _check_str(self.difficulty, "Exercise.difficulty")
        if self.category not in CATEGORIES:
            raise InvalidRecordError(f"Exercise.category must be one of {sorted(CATEGORIES)}")
        if self.difficulty not in DIFFICULTIES:
            raise InvalidRecordError(f"Exercise.difficulty must be one of {sorted(DIFFICULTIES)}")
        _check_str_list(self.tags, "Exercise.tags")
        if not self.tags:
            raise InvalidRecordError("Exercise.tags must not be empty")

    @classmethod
    def from_payload(cls, payload: Any) -> "Exercise":
        data = _require_mapping(payload, cls.KIND)
        _check_keys(data, cls.FIELDS, cls.KIND)
        return cls(
            id=data["id"],
            title=data["title"],
            short_description=data["shortDescription"],
            description=data["description"],
            category=data["category"],
            difficulty=data["difficulty"],
            tags=data["tags"],
        )

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "shortDescription": self.short_description,
            "description": self.description,
            "category": self.category,
            "difficulty": self.difficulty,
            "tags": list(self.tags),
        }


@dataclass
class JournalEntry:
    id: str
    exercise_id: str
    completion_date: date
    comment: str
    mood: int
    created_at: datetime

    KIND = "JournalEntry"
    FIELDS = ("id", "exerciseId", "completionDate", "comment", "mood", "createdAt")

    def __post_init__(self) -> None:
        if isinstance(self.completion_date, datetime):
            self.completion_date = self.completion_date.date()
        if isinstance(self.created_at, datetime):
            self.created_at = as_utc(self.created_at)
        self.validate()

    def validate(self) -> None:
        _check_id(self.id, "JournalEntry.id")
        _check_str(self.exercise_id, "JournalEntry.exerciseId")
        if not isinstance(self.completion_date, date) or isinstance(self.completion_date, datetime):
            raise InvalidRecordError("JournalEntry.completionDate must be a calendar date")
        _check_str(self.comment, "JournalEntry.comment")
        _check_mood(self.mood)
        _check_timestamp(self.created_at, "JournalEntry.createdAt")

    @classmethod
    def from_payload(cls, payload: Any) -> "JournalEntry":
        data = _require_mapping(payload, cls.KIND)
        _check_keys(data, cls.FIELDS, cls.KIND)
        return cls(
            id=data["id"],
            exercise_id=data["exerciseId"],
            completion_date=parse_calendar_date(data["completionDate"]),
            comment=data["comment"],
            mood=data["mood"],
            created_at=parse_timestamp(data["createdAt"]),
        )

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "exerciseId": self.exercise_id,
            "completionDate": self.completion_date.isoformat(),
            "comment": self.comment,
            "mood": self.mood,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class TrainingJourney:
    id: str
    name: str
    exercise_ids: list[str]
    created_at: datetime

    KIND = "TrainingJourney"
    FIELDS = ("id", "name", "exerciseIds", "createdAt")

    def __post_init__(self) -> None:
        if isinstance(self.created_at, datetime):
            self.created_at = as_utc(self.created_at)
        self.validate()

    def validate(self) -> None:
        _check_id(self.id, "TrainingJourney.id")
        _check_str(self.name, "TrainingJourney.name")
        _check_str_list(self.exercise_ids, "TrainingJourney.exerciseIds")
        _check_timestamp(self.created_at, "TrainingJourney.createdAt")

    @classmethod
    def from_payload(cls, payload: Any) -> "TrainingJourney":
        data = _require_mapping(payload, cls.KIND)
        _check_keys(data, cls.FIELDS, cls.KIND)
        return cls(
            id=data["id"],
            name=data["name"],
            exercise_ids=data["exerciseIds"],
            created_at=parse_timestamp(data["createdAt"]),
        )

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "exerciseIds": list(self.exercise_ids),
            "createdAt": self.created_at.isoformat(),
        }
