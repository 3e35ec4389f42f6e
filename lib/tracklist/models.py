"""
Tracklist のデータモデル。
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, NamedTuple, Optional


# 1行分のレコード。キーはヘッダー名、足りないセルは None
TrackRecord = Dict[str, Optional[str]]


class CanonicalField(str, Enum):
    """
    ロケールに依存しない意味上の列。
    Rekordbox の書き出しは表示言語ごとにヘッダー名が変わるため、
    実際の列名は fields.FIELD_ALIASES で引く。
    """
    ARTIST = "artist"
    TITLE = "title"


class ParsedTracklist(NamedTuple):
    """parse_tracklist() の戻り値。(headers, tracks) としてアンパック可能。"""
    headers: List[str]
    tracks: List[TrackRecord]
