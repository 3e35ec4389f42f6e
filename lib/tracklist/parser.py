"""
Rekordbox プレイリスト書き出し (.txt, タブ区切り) のパーサー。
"""
from __future__ import annotations

import logging
from typing import List

from lib.tracklist.models import ParsedTracklist, TrackRecord

logger = logging.getLogger(__name__)

DELIMITER = "\t"

# 書き出しの連番列は 1 から始まる
FIRST_ROW_NUMBER = "1"


def _non_blank_lines(text: str) -> List[str]:
    """空行（空白のみの行を含む）を落とす。残りの行はそのまま。"""
    return [line for line in (text or "").split("\n") if line.strip() != ""]


def _find_first_data_line(lines: List[str]) -> int | None:
    """
    先頭セルが "1" の最初の行を探す。
    1行目は常にヘッダー扱いなので 2行目から探す。
    """
    for idx in range(1, len(lines)):
        if lines[idx].split(DELIMITER)[0] == FIRST_ROW_NUMBER:
            return idx
    return None


def _build_record(headers: List[str], line: str) -> TrackRecord:
    values = line.split(DELIMITER)
    record: TrackRecord = {}
    for idx, header in enumerate(headers):
        # 重複ヘッダーは後ろの列で上書きされる
        record[header] = values[idx] if idx < len(values) else None
    return record


def parse_tracklist(text: str) -> ParsedTracklist:
    """
    タブ区切りテキストを (headers, tracks) に変換する。

    ヘッダーの決定:
    1. 先頭セルが "1" の最初の行より前をすべてヘッダー行とみなす
       （書き出し形式によってはヘッダーが2行に折り返される）
    2. 該当行がなければ1行目だけをヘッダーにする
    3. ヘッダー行は区切り文字を挟まずにそのまま連結してからタブで分割する
       例: "A\\tB" + "C\\tD" -> ["A", "BC", "D"]

    データ行はヘッダーと位置で対応付ける:
    - セルが足りない列は None
    - ヘッダーより多いセルは捨てる

    例外は投げない。空入力は ([], []) を返す。

    Args:
        text: ファイル全体のテキスト

    Returns:
        ParsedTracklist(headers, tracks)
    """
    lines = _non_blank_lines(text)
    if not lines:
        logger.debug("[tracklist] parsed empty input")
        return ParsedTracklist(headers=[], tracks=[])

    first_data = _find_first_data_line(lines)
    if first_data is None:
        header_lines, data_lines = lines[:1], lines[1:]
    else:
        header_lines, data_lines = lines[:first_data], lines[first_data:]

    headers = "".join(header_lines).split(DELIMITER)
    tracks = [_build_record(headers, line) for line in data_lines]

    logger.debug(
        f"[tracklist] parsed header_lines={len(header_lines)} "
        f"headers={len(headers)} tracks={len(tracks)}"
    )
    return ParsedTracklist(headers=headers, tracks=tracks)
