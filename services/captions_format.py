"""
WebVTT formatter
Serializes a caption snapshot into a subtitle track with exact timestamps
"""
from typing import Iterable, List

from .captions_types import Caption, to_millis

VTT_HEADER = "WEBVTT"
VTT_MIMETYPE = "text/vtt"


def format_timestamp(seconds: float) -> str:
    """
    Convert seconds to a WebVTT timestamp (HH:MM:SS.mmm).
    Rounded half-up to the nearest millisecond. Hours widen past two digits instead
    of wrapping at 24; negative offsets clamp to zero.
    """
    ms = max(0, to_millis(seconds))
    h = ms // 3600000
    ms -= h*3600000
    m = ms // 60000
    ms -= m*60000
    s = ms // 1000
    ms -= s*1000
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def to_vtt(captions: Iterable[Caption]) -> str:
    """
    Render captions as WebVTT text, in the order given.
    Cue numbers are 1-based output positions.
    """
    out = [VTT_HEADER, ""]
    for i, c in enumerate(captions, 1):
        out.append(str(i))
        out.append(f"{format_timestamp(c.start)} --> {format_timestamp(c.end)}")
        out.extend(_cue_lines(c.text))
        out.append("")  # blank line
    return "\n".join(out) + "\n"


class TrackEncoder:
    """Subtitle track encoder carrying the metadata a <track> element needs"""

    mimetype = VTT_MIMETYPE

    def __init__(self, label: str = "English", srclang: str = "en"):
        self.label = label
        self.srclang = srclang

    def encode(self, captions: Iterable[Caption]) -> str:
        return to_vtt(captions)

    def encode_bytes(self, captions: Iterable[Caption]) -> bytes:
        return self.encode(captions).encode("utf-8")

# --------- Helpers ----------

def _cue_lines(text: str) -> List[str]:
    """
    Split cue text into plain-text lines that cannot end the cue block early.
    & < > are escaped, so "-->" and markup-like input render literally.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return [ln for ln in text.split("\n") if ln.strip()]
