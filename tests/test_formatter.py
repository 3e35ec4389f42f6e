import unittest

from lib.tracklist.formatter import format_line, format_tracklist
from lib.tracklist.parser import parse_tracklist


class FormatTracklistTests(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(format_tracklist([], True), "")
        self.assertEqual(format_tracklist([], False), "")

    def test_numbered(self):
        tracks = [{"Artist": "Daft Punk", "Track Title": "One More Time"}]
        self.assertEqual(format_tracklist(tracks, True), "1. Daft Punk - One More Time")

    def test_without_numbers(self):
        tracks = [{"Artist": "Daft Punk", "Track Title": "One More Time"}]
        self.assertEqual(format_tracklist(tracks, False), "Daft Punk - One More Time")

    def test_multiple_lines_and_fallbacks(self):
        tracks = [
            {"Artist": "Daft Punk", "Track Title": "One More Time"},
            {"Interpret": "Kraftwerk", "Titel": "Autobahn"},
            {"#": "3"},
        ]
        self.assertEqual(
            format_tracklist(tracks),
            "1. Daft Punk - One More Time\n"
            "2. Kraftwerk - Autobahn\n"
            "3. Unknown Artist - Unknown Track",
        )

    def test_idempotent(self):
        tracks = [{"Artist": "Daft Punk", "Track Title": "One More Time"}] * 3
        self.assertEqual(format_tracklist(tracks, True), format_tracklist(tracks, True))
        self.assertEqual(format_tracklist(tracks, False), format_tracklist(tracks, False))

    def test_format_line(self):
        track = {"Artist": "Modjo", "Track Title": "Lady"}
        self.assertEqual(format_line(track, 9), "10. Modjo - Lady")
        self.assertEqual(format_line(track, 9, show_numbers=False), "Modjo - Lady")

    def test_parse_then_format(self):
        text = "#\tTrack Title\tArtist\n1\tOne More Time\tDaft Punk\n2\tDigital Love\n"
        _, tracks = parse_tracklist(text)
        self.assertEqual(
            format_tracklist(tracks),
            "1. Daft Punk - One More Time\n2. Unknown Artist - Digital Love",
        )


if __name__ == "__main__":
    unittest.main()
