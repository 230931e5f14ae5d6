"""Text codec for one collection of records."""
from __future__ import annotations

import json
from typing import Generic, Iterable, Type, TypeVar

from wingman.domain.records import InvalidRecordError

from .errors import DecodeError

R = TypeVar("R")


class CollectionCodec(Generic[R]):
    """
    Converts an ordered list of records to and from a JSON array.

    Absent or blank text decodes to an empty list. Anything else that is not an
    array of valid payloads raises ``DecodeError``.
    """

    def __init__(self, record_type: Type[R]) -> None:
        self.record_type = record_type

    @property
    def kind(self) -> str:
        return getattr(self.record_type, "KIND", self.record_type.__name__)

    def decode(self, text: str | None) -> list[R]:
        if text is None or not text.strip():
            return []
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"{self.kind} collection is not valid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise DecodeError(f"{self.kind} collection must be a JSON array")
        records = []
        for index, item in enumerate(payload):
            try:
                records.append(self.record_type.from_payload(item))
            except InvalidRecordError as exc:
                raise DecodeError(f"{self.kind} #{index}: {exc}") from exc
        return records

    def encode(self, records: Iterable[R]) -> str:
        """Encode after re-checking every record, so the result always decodes.

        Raises ``InvalidRecordError`` before anything reaches the store.
        """
        payloads = []
        for record in records:
            if not isinstance(record, self.record_type):
                raise InvalidRecordError(f"expected {self.kind}, got {type(record).__name__}")
            record.validate()
            payloads.append(record.to_payload())
        return json.dumps(payloads, ensure_ascii=False)
