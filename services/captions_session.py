"""
Caption editing session
Binds one caption store to one video source and turns store results into notices
"""
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Any, Dict, Optional

from .captions_format import TrackEncoder
from .captions_store import CaptionStore
from .captions_types import CaptionDraft, CaptionResult

logger = logging.getLogger(__name__)


@dataclass
class Notice:
    """Notification the host should show the user"""
    level: str  # success / error
    message: str

    @classmethod
    def from_result(cls, result: CaptionResult) -> 'Notice':
        return cls(level="success" if result.success else "error", message=result.message or "")


class CaptionSession:
    """
    Editing session for a single video source.

    Captions never outlive their source: switching to a different URL
    clears the store, the edit cursor and the pending draft.

    The store assumes one caller at a time; every public method holds
    session_lock so concurrent requests run validate and commit as one step.
    """

    def __init__(self, encoder: Optional[TrackEncoder] = None):
        self.store = CaptionStore()
        self.encoder = encoder or TrackEncoder()
        self.source_url = ""
        self.draft = CaptionDraft.empty()
        self.session_lock = Lock()

    @property
    def has_source(self) -> bool:
        return bool(self.source_url)

    @property
    def has_track(self) -> bool:
        """A track is only attached once there is something to show"""
        return self.has_source and len(self.store) > 0

    def change_source(self, url: str) -> bool:
        """
        Switch to a new video source. Returns True if the source changed
        (and the session was reset), False for the current URL.
        """
        url = (url or "").strip()
        with self.session_lock:
            if url == self.source_url:
                return False

            logger.info(f"🎬 Video source changed: {self.source_url or '<none>'} -> {url or '<none>'}")
            self.source_url = url
            self.store.clear()
            self.draft = CaptionDraft.empty()
            return True

    def submit(self, draft: CaptionDraft) -> CaptionResult:
        with self.session_lock:
            self.draft = draft
            result = self.store.submit(draft)
            if result.success:
                self.draft = CaptionDraft.empty()
            return result

    def edit(self, index: int) -> CaptionResult:
        with self.session_lock:
            result = self.store.begin_edit(index)
            if result.success:
                self.draft = CaptionDraft.from_caption(result.caption)
            return result

    def cancel_edit(self, index: Optional[int] = None) -> bool:
        """
        Leave edit mode. With index, only cancels when that caption is the
        one being edited; returns False otherwise.
        """
        with self.session_lock:
            if index is not None and index != self.store.editing_index:
                return False
            self.store.cancel_edit()
            self.draft = CaptionDraft.empty()
            return True

    def delete(self, index: int) -> CaptionResult:
        with self.session_lock:
            was_editing = self.store.editing_index == index
            result = self.store.delete(index)
            if result.success and was_editing:
                self.draft = CaptionDraft.empty()
            return result

    def track(self) -> str:
        """WebVTT text for the current captions"""
        with self.session_lock:
            return self.encoder.encode(self.store.snapshot())

    def to_dict(self) -> Dict[str, Any]:
        with self.session_lock:
            return {
                "source_url": self.source_url,
                "editing_index": self.store.editing_index,
                "draft": self.draft.to_dict(),
                "captions": [c.to_dict() for c in self.store.snapshot()],
                "has_track": self.has_source and len(self.store) > 0,
                "track": {
                    "label": self.encoder.label,
                    "srclang": self.encoder.srclang,
                    "mimetype": self.encoder.mimetype,
                },
            }
