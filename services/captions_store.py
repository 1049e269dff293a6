"""
Caption store for the caption editor
Owns the ordered caption list, validates drafts and tracks the edit cursor
"""
import logging
from typing import Iterator, List, Optional, Tuple

from .captions_types import (
    Caption,
    CaptionDraft,
    CaptionErrorKind,
    CaptionResult,
    parse_seconds,
    to_millis,
)

logger = logging.getLogger(__name__)


class CaptionStore:
    """
    Ordered, index-addressed list of captions for one video source.

    Guarantees:
    - no two captions overlap ([start, end) half-open intervals)
    - insertion order is preserved, captions are never re-sorted
    - the edit cursor never points past the end of the list

    Edit cursor states: Idle (None) or Editing(index).
    """

    def __init__(self):
        self._captions: List[Caption] = []
        self._editing_index: Optional[int] = None

    def __len__(self) -> int:
        return len(self._captions)

    def __iter__(self) -> Iterator[Caption]:
        return iter(self.snapshot())

    @property
    def editing_index(self) -> Optional[int]:
        return self._editing_index

    @property
    def is_editing(self) -> bool:
        return self._editing_index is not None

    def snapshot(self) -> Tuple[Caption, ...]:
        """Read-only ordered view for the track encoder"""
        return tuple(self._captions)

    def validate_draft(self, draft: CaptionDraft, exclude_index: Optional[int] = None) -> CaptionResult:
        """
        Turn a raw draft into a Caption without touching the store.
        exclude_index skips the caption being edited so it never overlaps itself.
        """
        text = draft.text if isinstance(draft.text, str) else ""
        start = parse_seconds(draft.start)
        end = parse_seconds(draft.end)

        if not text.strip() or start is None or end is None:
            return CaptionResult.fail(CaptionErrorKind.MISSING_FIELD)

        # compared on the millisecond grid so every cue encodes with end > start
        if start < 0 or to_millis(start) >= to_millis(end):
            return CaptionResult.fail(CaptionErrorKind.INVALID_RANGE)

        candidate = Caption(text=text, start=start, end=end)
        for index, existing in enumerate(self._captions):
            if index == exclude_index:
                continue
            if candidate.overlaps_with(existing):
                logger.debug(
                    f"Draft [{start}, {end}) overlaps caption #{index} "
                    f"[{existing.start}, {existing.end})"
                )
                return CaptionResult.fail(CaptionErrorKind.OVERLAP, index=index)

        return CaptionResult.ok(caption=candidate, index=exclude_index)

    def commit(self, caption: Caption, edit_index: Optional[int] = None) -> Caption:
        """
        Store a caption that already passed validate_draft.
        With edit_index the caption replaces that entry in place and the
        edit cursor returns to Idle; otherwise it is appended.
        """
        if edit_index is not None:
            if not 0 <= edit_index < len(self._captions):
                raise IndexError(f"No caption at index {edit_index}")
            self._captions[edit_index] = caption
            self._editing_index = None
            logger.info(f"Updated caption #{edit_index}: {caption.start}s - {caption.end}s")
        else:
            self._captions.append(caption)
            logger.info(f"Added caption #{len(self._captions) - 1}: {caption.start}s - {caption.end}s")
        return caption

    def submit(self, draft: CaptionDraft) -> CaptionResult:
        """Add a new caption, or update the one under the edit cursor"""
        edit_index = self._editing_index
        result = self.validate_draft(draft, exclude_index=edit_index)
        if not result.success:
            logger.debug(f"Rejected draft: {result.error.value}")
            return result

        caption = self.commit(result.caption, edit_index=edit_index)
        if edit_index is not None:
            return CaptionResult.ok(caption=caption, index=edit_index, action="updated")
        return CaptionResult.ok(caption=caption, index=len(self._captions) - 1, action="added")

    def begin_edit(self, index: int) -> CaptionResult:
        """Point the edit cursor at index and return its current values"""
        if not self._in_range(index):
            return CaptionResult.fail(CaptionErrorKind.INDEX_OUT_OF_RANGE, index=index)
        self._editing_index = index
        return CaptionResult.ok(caption=self._captions[index], index=index, action="editing")

    def cancel_edit(self) -> None:
        self._editing_index = None

    def delete(self, index: int) -> CaptionResult:
        """Remove the caption at index, shifting later captions down by one"""
        if not self._in_range(index):
            return CaptionResult.fail(CaptionErrorKind.INDEX_OUT_OF_RANGE, index=index)

        removed = self._captions.pop(index)

        cursor = self._editing_index
        if cursor is not None:
            if cursor == index:
                self._editing_index = None
            elif index < cursor:
                self._editing_index = cursor - 1

        logger.info(f"Deleted caption #{index}: {removed.start}s - {removed.end}s")
        return CaptionResult.ok(caption=removed, index=index, action="deleted")

    def clear(self) -> None:
        """Drop every caption and return to Idle"""
        if self._captions:
            logger.info(f"Cleared {len(self._captions)} captions")
        self._captions = []
        self._editing_index = None

    def _in_range(self, index: int) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._captions)
