"""
Rekordbox playlist export (.txt) parsing and tracklist formatting.

Public API:
  - parse_tracklist(text) -> ParsedTracklist(headers, tracks)
  - format_tracklist(tracks, show_numbers) -> str
  - resolve_field(track, field) -> str
  - read_upload_text(data, filename, content_type) -> str
"""
from lib.tracklist.parser import parse_tracklist
from lib.tracklist.formatter import format_tracklist, format_line
from lib.tracklist.fields import resolve_field, known_header, FIELD_ALIASES, FALLBACKS
from lib.tracklist.models import CanonicalField, ParsedTracklist, TrackRecord
from lib.tracklist.session import TracklistSession
from lib.tracklist.upload import (
    read_upload_text,
    TracklistUploadError,
    UnsupportedFileError,
    UploadTooLargeError,
)

__all__ = [
    "parse_tracklist",
    "format_tracklist",
    "format_line",
    "resolve_field",
    "known_header",
    "FIELD_ALIASES",
    "FALLBACKS",
    "CanonicalField",
    "ParsedTracklist",
    "TrackRecord",
    "TracklistSession",
    "read_upload_text",
    "TracklistUploadError",
    "UnsupportedFileError",
    "UploadTooLargeError",
]
