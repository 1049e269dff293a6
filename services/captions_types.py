"""
Caption data types and models
Shared types for the caption editor: validated captions, raw drafts and results
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class CaptionErrorKind(str, Enum):
    """User-correctable failures reported by the caption store"""
    MISSING_FIELD = "missing_field"
    INVALID_RANGE = "invalid_range"
    OVERLAP = "overlap"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


ERROR_MESSAGES = {
    CaptionErrorKind.MISSING_FIELD: "Please fill all fields.",
    CaptionErrorKind.INVALID_RANGE: "Start time must be less than end time.",
    CaptionErrorKind.OVERLAP: "The specified time range overlaps with an existing caption.",
    CaptionErrorKind.INDEX_OUT_OF_RANGE: "No caption exists at that position.",
}

SUCCESS_MESSAGES = {
    "added": "Caption added successfully!",
    "updated": "Caption updated successfully!",
    "deleted": "Caption deleted successfully!",
}


@dataclass(frozen=True)
class Caption:
    text: str
    start: float
    end: float

    def overlaps_with(self, other: 'Caption') -> bool:
        """Half-open overlap: touching endpoints do not count"""
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict:
        return {"text": self.text, "start": self.start, "end": self.end}


@dataclass
class CaptionDraft:
    """
    Raw caption input as typed by the user.
    Values may be strings, numbers or None and are only trusted after
    CaptionStore.validate_draft turns them into a Caption.
    """
    text: Any = ""
    start: Any = ""
    end: Any = ""

    @classmethod
    def empty(cls) -> 'CaptionDraft':
        return cls()

    @classmethod
    def from_caption(cls, caption: Caption) -> 'CaptionDraft':
        """Pre-fill a draft from an existing caption (edit mode)"""
        return cls(text=caption.text, start=caption.start, end=caption.end)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'CaptionDraft':
        return cls(
            text=data.get("text", ""),
            start=data.get("start", ""),
            end=data.get("end", ""),
        )

    def to_dict(self) -> dict:
        return {"text": self.text, "start": self.start, "end": self.end}


@dataclass
class CaptionResult:
    """Outcome of a caption store operation"""
    success: bool
    caption: Optional[Caption] = None
    error: Optional[CaptionErrorKind] = None
    index: Optional[int] = None
    action: Optional[str] = None  # added / updated / deleted / editing

    @classmethod
    def ok(cls, caption: Optional[Caption] = None, index: Optional[int] = None,
           action: Optional[str] = None) -> 'CaptionResult':
        return cls(success=True, caption=caption, index=index, action=action)

    @classmethod
    def fail(cls, error: CaptionErrorKind, index: Optional[int] = None) -> 'CaptionResult':
        return cls(success=False, error=error, index=index)

    @property
    def message(self) -> Optional[str]:
        """User-facing text for this outcome, if any"""
        if self.error is not None:
            return ERROR_MESSAGES[self.error]
        return SUCCESS_MESSAGES.get(self.action)


def parse_seconds(value: Any) -> Optional[float]:
    """
    Parse a raw time field into float seconds.
    Returns None for empty, non-numeric, NaN or infinite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(seconds) or math.isinf(seconds):
        return None
    return seconds


def to_millis(seconds: float) -> int:
    """Snap seconds to the millisecond grid used by track timestamps (half-up)"""
    return math.floor(seconds * 1000 + 0.5)
