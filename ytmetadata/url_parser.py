"""Classify YouTube URLs and bare identifiers into video, playlist or channel inputs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern

VIDEO_ID = "video_id"
PLAYLIST_ID = "playlist_id"
CHANNEL_USER = "channel_user"
CHANNEL_ID = "channel_id"
UNKNOWN = "unknown"

_HOST = r"https?://(?:(?:www|m)\.)?youtube\.com"

# Tried in order; first type with a matching pattern wins
_PATTERNS: dict[str, list[Pattern[str]]] = {
    VIDEO_ID: [
        re.compile(_HOST + r"/watch\?(?:[^#]*&)?v=([\w-]+)", re.IGNORECASE | re.ASCII),
        re.compile(r"https?://youtu\.be/([\w-]+)", re.IGNORECASE | re.ASCII),
        re.compile(_HOST + r"/(?:embed|shorts|live)/([\w-]+)", re.IGNORECASE | re.ASCII),
    ],
    PLAYLIST_ID: [
        re.compile(_HOST + r"/playlist\?(?:[^#]*&)?list=([\w-]+)", re.IGNORECASE | re.ASCII),
    ],
    CHANNEL_USER: [
        re.compile(_HOST + r"/user/([\w-]+)", re.IGNORECASE | re.ASCII),
    ],
    CHANNEL_ID: [
        re.compile(_HOST + r"/channel/([\w-]+)", re.IGNORECASE | re.ASCII),
    ],
}

# Bare identifiers (no URL); only consulted when no URL pattern matched
_BARE_CHANNEL_ID_RE = re.compile(r"^UC[\w-]{22}$", re.ASCII)
_BARE_PLAYLIST_ID_RE = re.compile(r"^(?:PL|UU|LL|FL|OL|RD)[\w-]{11,}$", re.ASCII)
_BARE_VIDEO_ID_RE = re.compile(r"^[\w-]{11}$", re.ASCII)


@dataclass
class ParsedInput:
    """Classified user input."""

    type: str
    value: Optional[str] = None
    may_hide_others: bool = True
    original_input: str = ""

    @property
    def is_known(self) -> bool:
        return self.type != UNKNOWN


def register_pattern(input_type: str, pattern: Pattern[str]) -> None:
    """Register an extra URL shape for an input type."""
    if input_type not in _PATTERNS:
        raise ValueError(f"Unknown input type: {input_type!r}")
    _PATTERNS[input_type].append(pattern)


def _classify_bare(value: str) -> Optional[tuple[str, str]]:
    if _BARE_CHANNEL_ID_RE.match(value):
        return CHANNEL_ID, value
    if _BARE_PLAYLIST_ID_RE.match(value):
        return PLAYLIST_ID, value
    if _BARE_VIDEO_ID_RE.match(value):
        return VIDEO_ID, value
    return None


def classify_input(value: str) -> ParsedInput:
    """
    Classify a URL or identifier.

    Returns a ParsedInput of type UNKNOWN (with no value) for anything unrecognized.
    """
    if not value or not isinstance(value, str):
        return ParsedInput(type=UNKNOWN)

    text = value.strip()
    for input_type, patterns in _PATTERNS.items():
        for regex in patterns:
            match = regex.search(text)
            if match:
                return ParsedInput(type=input_type, value=match.group(1), original_input=text)

    bare = _classify_bare(text)
    if bare:
        return ParsedInput(type=bare[0], value=bare[1], original_input=text)

    return ParsedInput(type=UNKNOWN, original_input=text)
