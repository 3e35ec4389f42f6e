"""
ロケールごとのヘッダー名を吸収するフィールド解決。

Rekordbox は表示言語のままヘッダーを書き出すので、
"Artist" が "Interpret" や "アーティスト" になる。
ここでは既知の表記を登録順に試し、最初に値があったものを採用する。
"""
from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

from lib.tracklist.models import CanonicalField


ARTIST_ALIASES: Tuple[str, ...] = (
    "Artist",           # English / Swedish
    "Interpret",        # German / Czech
    "Artiste",          # French
    "Artista",          # Spanish / Italian / Portuguese
    "Artiest",          # Dutch
    "Kunstner",         # Danish
    "Sanatçı",          # Turkish
    "艺术家",            # Simplified Chinese
    "藝人",              # Traditional Chinese
    "演出者",            # Traditional Chinese (Taiwan)
    "아티스트",          # Korean
    "アーティスト",      # Japanese
    "Исполнитель",      # Russian
    "Καλλιτέχνης",      # Greek
    "Előadó",           # Hungarian
    "Umělec",           # Czech
)

TITLE_ALIASES: Tuple[str, ...] = (
    "Track Title",      # English
    "Title",
    "Titel",            # German / Dutch / Swedish / Danish
    "Titre",            # French
    "Título",           # Spanish / Portuguese
    "Titolo",           # Italian
    "Parça Adı",        # Turkish
    "Başlık",           # Turkish
    "曲目标题",          # Simplified Chinese
    "标题",              # Simplified Chinese
    "曲目標題",          # Traditional Chinese
    "標題",              # Traditional Chinese
    "트랙 제목",         # Korean
    "제목",              # Korean
    "トラックタイトル",  # Japanese
    "タイトル",          # Japanese
    "Название трека",   # Russian
    "Название",         # Russian
    "Τίτλος κομματιού", # Greek
    "Τίτλος",           # Greek
    "Szám címe",        # Hungarian
    "Cím",              # Hungarian
    "Název skladby",    # Czech
    "Název",            # Czech
)

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    CanonicalField.ARTIST.value: ARTIST_ALIASES,
    CanonicalField.TITLE.value: TITLE_ALIASES,
}

FALLBACKS: Dict[str, str] = {
    CanonicalField.ARTIST.value: "Unknown Artist",
    CanonicalField.TITLE.value: "Unknown Track",
}

_KNOWN_HEADERS = frozenset(ARTIST_ALIASES) | frozenset(TITLE_ALIASES)


def _field_key(field: CanonicalField | str) -> str:
    if isinstance(field, CanonicalField):
        return field.value
    return str(field)


def resolve_field(track: Mapping[str, Optional[str]], field: CanonicalField | str) -> str:
    """
    track から canonical field の値を取り出す。

    FIELD_ALIASES の登録順に見て、空でない文字列が最初に見つかったものを返す。
    どれもなければ FALLBACKS の値（"Unknown Artist" / "Unknown Track"）。
    例外は投げない。
    """
    key = _field_key(field)
    for alias in FIELD_ALIASES.get(key, ()):
        value = track.get(alias)
        if isinstance(value, str) and value:
            return value
    return FALLBACKS.get(key, "Unknown")


def known_header(name: str) -> bool:
    """name が artist/title のいずれかの既知表記なら True"""
    return name in _KNOWN_HEADERS
