"""
UI 側が持つトラックリストの状態 (view-model)。

アップロードごとに headers / tracks を丸ごと差し替える。
パーサーとフォーマッターは状態を持たないので、ここだけが可変。
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from lib.tracklist.formatter import format_tracklist
from lib.tracklist.models import TrackRecord
from lib.tracklist.parser import parse_tracklist


def _new_session_id() -> str:
    return uuid.uuid4().hex


@dataclass
class TracklistSession:
    session_id: str = field(default_factory=_new_session_id)
    filename: Optional[str] = None
    headers: List[str] = field(default_factory=list)
    tracks: List[TrackRecord] = field(default_factory=list)
    show_numbers: bool = True

    def load(self, text: str, filename: str | None = None) -> "TracklistSession":
        """テキストをパースして headers / tracks を置き換える。"""
        parsed = parse_tracklist(text)
        self.headers = parsed.headers
        self.tracks = parsed.tracks
        self.filename = filename
        return self

    def reset(self) -> None:
        self.filename = None
        self.headers = []
        self.tracks = []
        self.show_numbers = True

    def set_show_numbers(self, value: bool) -> None:
        self.show_numbers = bool(value)

    @property
    def formatted(self) -> str:
        return format_tracklist(self.tracks, self.show_numbers)

    @property
    def is_empty(self) -> bool:
        return not self.tracks

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "filename": self.filename,
            "headers": list(self.headers),
            "tracks": [dict(t) for t in self.tracks],
            "show_numbers": self.show_numbers,
            "formatted": self.formatted,
            "track_count": len(self.tracks),
        }
