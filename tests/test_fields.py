import unittest

from lib.tracklist.fields import (
    ARTIST_ALIASES,
    TITLE_ALIASES,
    FALLBACKS,
    known_header,
    resolve_field,
)
from lib.tracklist.models import CanonicalField


class ResolveFieldTests(unittest.TestCase):
    def test_every_artist_alias_resolves(self):
        for alias in ARTIST_ALIASES:
            with self.subTest(alias=alias):
                self.assertEqual(resolve_field({alias: "Daft Punk"}, "artist"), "Daft Punk")

    def test_every_title_alias_resolves(self):
        for alias in TITLE_ALIASES:
            with self.subTest(alias=alias):
                self.assertEqual(resolve_field({alias: "One More Time"}, "title"), "One More Time")

    def test_localized_headers(self):
        self.assertEqual(resolve_field({"Interpret": "Kraftwerk"}, CanonicalField.ARTIST), "Kraftwerk")
        self.assertEqual(resolve_field({"Artiste": "Air"}, CanonicalField.ARTIST), "Air")
        self.assertEqual(resolve_field({"Исполнитель": "Kino"}, CanonicalField.ARTIST), "Kino")
        self.assertEqual(resolve_field({"アーティスト": "YMO"}, CanonicalField.ARTIST), "YMO")
        self.assertEqual(resolve_field({"Titel": "Autobahn"}, CanonicalField.TITLE), "Autobahn")

    def test_fallbacks(self):
        track = {"#": "1", "BPM": "120.00"}
        self.assertEqual(resolve_field(track, "artist"), "Unknown Artist")
        self.assertEqual(resolve_field(track, "title"), "Unknown Track")
        self.assertEqual(resolve_field({}, CanonicalField.ARTIST), FALLBACKS["artist"])

    def test_empty_and_missing_values_are_skipped(self):
        track = {"Artist": "", "Interpret": None, "Artiste": "Justice"}
        self.assertEqual(resolve_field(track, "artist"), "Justice")

    def test_first_registered_alias_wins(self):
        track = {"Title": "Second", "Track Title": "First"}
        self.assertEqual(resolve_field(track, "title"), "First")

    def test_unknown_field_never_raises(self):
        self.assertEqual(resolve_field({"Artist": "x"}, "album"), "Unknown")

    def test_known_header(self):
        self.assertTrue(known_header("Track Title"))
        self.assertTrue(known_header("Interpret"))
        self.assertFalse(known_header("BPM"))


if __name__ == "__main__":
    unittest.main()
