"""
アップロードされたファイルをテキストに変換する。

Rekordbox の .txt 書き出しは UTF-16 LE (BOM付き) なので、BOM を見てから decode する。
"""
from __future__ import annotations

import codecs
import logging
import os
import re

import chardet

logger = logging.getLogger(__name__)

# 最大アップロードサイズ（バイト） - デフォルト 5MB
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", 5 * 1024 * 1024))

ALLOWED_EXTENSIONS = (".txt",)

_UTF16_BOMS = (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)
_NEWLINE_RE = re.compile(r"\r\n?")


class TracklistUploadError(Exception):
    """Upload rejected before parsing. status_code is used by the HTTP layer."""

    status_code = 400

    def __init__(self, message: str, filename: str | None = None):
        super().__init__(message)
        self.filename = filename


class UnsupportedFileError(TracklistUploadError):
    status_code = 415


class UploadTooLargeError(TracklistUploadError):
    status_code = 413


def is_supported_file(filename: str | None, content_type: str | None) -> bool:
    """
    拡張子 .txt か text/* の content-type なら受け付ける。
    ブラウザによっては .txt に application/octet-stream を付けるので、どちらか片方で良い。
    """
    name = (filename or "").lower()
    if name.endswith(ALLOWED_EXTENSIONS):
        return True
    ctype = (content_type or "").split(";")[0].strip().lower()
    return ctype.startswith("text/")


def decode_text(data: bytes) -> str:
    """
    BOM を見て decode する:
    - UTF-8 BOM → utf-8-sig
    - UTF-16 LE/BE BOM → utf-16
    - BOM なし → utf-8、だめなら chardet で推定した文字コード
      (ロシア語の cp1251、日本語の Shift_JIS などロケール依存の書き出し)

    BOM なしで NUL を含むもの、文字コードが推定できないものは ValueError。
    """
    if data.startswith(codecs.BOM_UTF8):
        return data.decode("utf-8-sig")
    if data.startswith(_UTF16_BOMS):
        return data.decode("utf-16")
    if b"\x00" in data:
        raise ValueError("binary content (NUL bytes without a UTF-16 BOM)")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(data)
    encoding = detected.get("encoding")
    if not encoding:
        raise ValueError("could not detect a text encoding")
    logger.debug(f"[upload] detected encoding={encoding} confidence={detected.get('confidence')}")
    try:
        return data.decode(encoding)
    except LookupError as e:
        raise ValueError(f"unknown encoding {encoding}") from e


def read_upload_text(
    data: bytes,
    filename: str | None = None,
    content_type: str | None = None,
    max_size: int | None = None,
) -> str:
    """
    アップロードされたバイト列を検証してテキストにする。

    Raises:
        UnsupportedFileError: .txt / text/* 以外、またはテキストとして読めない
        UploadTooLargeError: max_size (既定 MAX_UPLOAD_SIZE) を超える

    Returns:
        改行を \\n に揃えたテキスト。空ファイルは ""。
    """
    limit = MAX_UPLOAD_SIZE if max_size is None else max_size

    if not is_supported_file(filename, content_type):
        raise UnsupportedFileError(
            "Unsupported file type. Please upload the .txt file exported from Rekordbox.",
            filename=filename,
        )

    if len(data) > limit:
        raise UploadTooLargeError(
            f"File is too large ({len(data)} bytes, limit {limit} bytes).",
            filename=filename,
        )

    try:
        text = decode_text(data)
    except (UnicodeDecodeError, ValueError) as e:
        logger.warning(f"[upload] rejected filename={filename} content_type={content_type}: {e}")
        raise UnsupportedFileError(
            "The file does not look like a text export.",
            filename=filename,
        ) from e

    return _NEWLINE_RE.sub("\n", text)
