"""
jService Data Models

Immutable records for categories and clues returned by the jService API,
plus the lenient coercion used when reading their JSON fields.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict


# Plain ASCII decimal text: optional sign, digits, optional fraction
_NUMERIC_TEXT = re.compile(r"[+-]?[0-9]+(?:\.[0-9]+)?", re.ASCII)


def int_value(raw: Any) -> int:
    """
    Coerce a JSON value to an int, falling back to 0.

    Handles:
    - ints and floats (floats are truncated)
    - booleans (True -> 1, False -> 0)
    - plain decimal strings ("200", " -12.5 ")
    - anything else (None, lists, objects, "1_000", "1e3", garbage text) -> 0

    Args:
        raw: Decoded JSON value

    Returns:
        Integer value
    """
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return 0
        return int(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if not _NUMERIC_TEXT.fullmatch(text):
            return 0
        return int(text.split(".", 1)[0])
    return 0


def str_value(raw: Any) -> str:
    """
    Coerce a JSON value to a str, falling back to "".

    Integral floats print without a fraction (200.0 -> "200").

    Args:
        raw: Decoded JSON value

    Returns:
        Text value
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    if isinstance(raw, (int, float)):
        return str(raw)
    return ""


def _fields(data: Any) -> Dict[str, Any]:
    # Non-object elements read as all-missing
    return data if isinstance(data, dict) else {}


@dataclass(frozen=True)
class Category:
    """
    A trivia category.

    Attributes:
        id: Category id assigned by jService
        title: Category title
        clue_count: Number of clues available in the category
    """

    id: int
    title: str
    clue_count: int

    @classmethod
    def from_json(cls, data: Any) -> "Category":
        """Build a Category from one element of the categories array."""
        fields = _fields(data)
        return cls(
            id=int_value(fields.get("id")),
            title=str_value(fields.get("title")),
            clue_count=int_value(fields.get("clues")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API's field names."""
        return {"id": self.id, "title": self.title, "clues": self.clue_count}


@dataclass(frozen=True)
class Clue:
    """
    A single trivia clue.

    Attributes:
        id: Clue id assigned by jService
        category_id: Id of the category the clue belongs to
        value: Point value the clue was worth on the show
        question: The clue text
        answer: The expected response
    """

    id: int
    category_id: int
    value: int
    question: str
    answer: str

    @classmethod
    def from_json(cls, data: Any, category_id: Any = None) -> "Clue":
        """
        Build a Clue from one element of a clues array.

        Args:
            data: Decoded clue object
            category_id: When given, used instead of the element's
                ``category_id`` field

        Returns:
            Clue object
        """
        fields = _fields(data)
        if category_id is None:
            category_id = fields.get("category_id")
        return cls(
            id=int_value(fields.get("id")),
            category_id=int_value(category_id),
            value=int_value(fields.get("value")),
            question=str_value(fields.get("question")),
            answer=str_value(fields.get("answer")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API's field names."""
        return {
            "id": self.id,
            "category_id": self.category_id,
            "value": self.value,
            "question": self.question,
            "answer": self.answer,
        }
