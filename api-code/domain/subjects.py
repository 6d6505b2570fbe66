from __future__ import annotations

from enum import Enum
from typing import Optional


class Subject(str, Enum):
    MATHEMATICS = "Mathematics"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"
    COMPUTER_SCIENCE = "Computer Science"
    ENGLISH = "English"
    HISTORY = "History"
    GEOGRAPHY = "Geography"
    GENERAL = "General"


SUBJECT_CHOICES: tuple[str, ...] = tuple(subject.value for subject in Subject)


def parse_subject(value: Optional[str]) -> Optional[Subject]:
    """Map a display name onto the closed subject set, or None when unknown."""
    if value is None:
        return None
    if isinstance(value, Subject):
        return value
    cleaned = value.strip()
    for subject in Subject:
        if subject.value.lower() == cleaned.lower():
            return subject
    return None
