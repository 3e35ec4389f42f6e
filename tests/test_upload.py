import codecs
import unittest
from unittest import mock

from lib.tracklist.formatter import format_tracklist
from lib.tracklist.parser import parse_tracklist
from lib.tracklist.upload import (
    UnsupportedFileError,
    UploadTooLargeError,
    decode_text,
    is_supported_file,
    read_upload_text,
)


TEXT = "#\tTrack Title\tArtist\n1\tOne More Time\tDaft Punk\n"

RUSSIAN_EXPORT = (
    "#\tНазвание\tИсполнитель\tАльбом\n"
    "1\tГруппа крови\tКино\tГруппа крови\n"
    "2\tПеремен\tКино\tПоследний герой\n"
    "3\tЧто такое осень\tДДТ\tЧто такое осень\n"
    "4\tВидели ночь\tКино\tНочь\n"
    "5\tВесна\tДДТ\tЛюбовь\n"
)


class UploadTests(unittest.TestCase):
    def test_supported_file(self):
        self.assertTrue(is_supported_file("set.txt", "application/octet-stream"))
        self.assertTrue(is_supported_file("SET.TXT", None))
        self.assertTrue(is_supported_file("export", "text/plain; charset=utf-8"))
        self.assertFalse(is_supported_file("cover.jpg", "image/jpeg"))
        self.assertFalse(is_supported_file(None, None))

    def test_reads_utf8(self):
        self.assertEqual(read_upload_text(TEXT.encode("utf-8"), "set.txt", "text/plain"), TEXT)

    def test_reads_utf16_with_bom(self):
        data = codecs.BOM_UTF16_LE + TEXT.encode("utf-16-le")
        self.assertEqual(read_upload_text(data, "set.txt"), TEXT)

    def test_reads_utf8_with_bom(self):
        data = codecs.BOM_UTF8 + TEXT.encode("utf-8")
        self.assertEqual(read_upload_text(data, "set.txt"), TEXT)

    def test_detects_cyrillic_legacy_encoding(self):
        decoded = read_upload_text(RUSSIAN_EXPORT.encode("cp1251"), "set.txt")
        self.assertEqual(decoded, RUSSIAN_EXPORT)

        _, tracks = parse_tracklist(decoded)
        self.assertEqual(format_tracklist(tracks).splitlines()[0], "1. Кино - Группа крови")

    def test_uses_detected_encoding(self):
        data = "Beyonc\xe9".encode("cp1252")
        with mock.patch(
            "lib.tracklist.upload.chardet.detect",
            return_value={"encoding": "windows-1252", "confidence": 0.73},
        ) as detect:
            self.assertEqual(decode_text(data), "Beyonc\xe9")
        detect.assert_called_once_with(data)

    def test_undetectable_bytes_are_rejected(self):
        with mock.patch(
            "lib.tracklist.upload.chardet.detect",
            return_value={"encoding": None, "confidence": 0.0},
        ):
            with self.assertRaises(UnsupportedFileError):
                read_upload_text(b"\x81\x8d\x8f", "set.txt")

    def test_utf8_is_not_sent_to_detection(self):
        with mock.patch("lib.tracklist.upload.chardet.detect") as detect:
            self.assertEqual(decode_text("Ψ".encode("utf-8")), "Ψ")
        detect.assert_not_called()

    def test_normalizes_newlines(self):
        data = TEXT.replace("\n", "\r\n").encode("utf-8")
        self.assertEqual(read_upload_text(data, "set.txt"), TEXT)
        self.assertEqual(read_upload_text(b"a\rb", "set.txt"), "a\nb")

    def test_empty_file_is_accepted(self):
        self.assertEqual(read_upload_text(b"", "set.txt"), "")

    def test_rejects_unsupported_type(self):
        with self.assertRaises(UnsupportedFileError) as ctx:
            read_upload_text(b"\x89PNG", "cover.png", "image/png")
        self.assertEqual(ctx.exception.status_code, 415)
        self.assertEqual(ctx.exception.filename, "cover.png")

    def test_rejects_binary_content(self):
        with self.assertRaises(UnsupportedFileError):
            read_upload_text(b"abc\x00def", "set.txt", "text/plain")

    def test_rejects_oversize(self):
        with self.assertRaises(UploadTooLargeError) as ctx:
            read_upload_text(b"x" * 11, "set.txt", max_size=10)
        self.assertEqual(ctx.exception.status_code, 413)


if __name__ == "__main__":
    unittest.main()
