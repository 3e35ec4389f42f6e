"""
パース済みのトラックを表示用の文字列にする。
"""
from __future__ import annotations

from typing import Mapping, Optional, Sequence

from lib.tracklist.fields import resolve_field
from lib.tracklist.models import CanonicalField


def format_line(track: Mapping[str, Optional[str]], index: int, show_numbers: bool = True) -> str:
    """index は 0 始まり。番号は index + 1 で表示する。"""
    artist = resolve_field(track, CanonicalField.ARTIST)
    title = resolve_field(track, CanonicalField.TITLE)
    if show_numbers:
        return f"{index + 1}. {artist} - {title}"
    return f"{artist} - {title}"


def format_tracklist(
    tracks: Sequence[Mapping[str, Optional[str]]],
    show_numbers: bool = True,
) -> str:
    """
    トラックリスト全体を "1. Artist - Title" 形式で改行区切りにする。

    副作用なし。同じ入力なら何度呼んでも同じ結果になるので、
    番号表示の切り替えごとに呼び直してよい。空リストは "" を返す。
    """
    return "\n".join(
        format_line(track, idx, show_numbers) for idx, track in enumerate(tracks)
    )
