"""
Tests for cleaning and validating raw AI metadata.
"""
import unittest

from stock_metadata.blacklist import FULL_BLACKLIST, BLACKLIST_WORDS, BLACKLIST_BRANDS
from stock_metadata.models import Metadata
from stock_metadata.normalizer import normalize_metadata, validate_metadata


class TestNormalizeMetadata(unittest.TestCase):
    """Test cases for normalize_metadata."""

    def test_title_trimmed_and_truncated(self):
        """Titles are trimmed and cut to 200 characters."""
        self.assertEqual(normalize_metadata({"title": "  Sunset over sea  "}).title, "Sunset over sea")
        title = normalize_metadata({"title": "a" * 250}).title
        self.assertEqual(len(title), 200)
        self.assertEqual(title, "a" * 200)

    def test_description_truncated(self):
        """Descriptions are cut to 200 characters."""
        description = normalize_metadata({"description": "b" * 201}).description
        self.assertEqual(description, "b" * 200)

    def test_missing_fields_default_to_empty(self):
        """Missing fields become empty values."""
        self.assertEqual(normalize_metadata({}), Metadata("", "", []))
        self.assertEqual(normalize_metadata(None), Metadata("", "", []))
        self.assertEqual(normalize_metadata("not a mapping"), Metadata("", "", []))

    def test_wrongly_typed_fields_default_to_empty(self):
        """Non-string text and non-list keywords are ignored."""
        result = normalize_metadata({"title": 123, "description": ["x"], "keywords": "sky, sea"})
        self.assertEqual(result, Metadata("", "", []))

    def test_keywords_lowercased_trimmed_and_empty_dropped(self):
        """Keywords are lowercased and trimmed, and empty ones removed."""
        result = normalize_metadata({"keywords": [" Sky ", "", "   ", "SEA", 5, None]})
        self.assertEqual(result.keywords, ["sky", "sea"])

    def test_keywords_deduplicated_case_insensitively(self):
        """Duplicates in any case collapse into the first occurrence."""
        result = normalize_metadata({"keywords": ["Sky", "sea", "SKY", " sky", "Sea", "sand"]})
        self.assertEqual(result.keywords, ["sky", "sea", "sand"])

    def test_blacklisted_keywords_removed(self):
        """Blacklisted keywords are removed in order."""
        result = normalize_metadata({"keywords": ["nature", "beautiful", "mountain", "stunning", "forest"]})
        self.assertEqual(result.keywords, ["nature", "mountain", "forest"])

    def test_blacklist_closure(self):
        """No blacklisted entry survives normalization in any case."""
        raw = [word.upper() for word in BLACKLIST_WORDS + BLACKLIST_BRANDS] + ["river", "Hill"]
        result = normalize_metadata({"keywords": raw})
        self.assertEqual(result.keywords, ["river", "hill"])
        for keyword in result.keywords:
            self.assertNotIn(keyword, FULL_BLACKLIST)

    def test_keywords_limited_to_first_fifty(self):
        """Only the first 50 keywords are kept."""
        raw = [f"keyword{i}" for i in range(60)]
        result = normalize_metadata({"keywords": raw})
        self.assertEqual(result.keywords, raw[:50])

    def test_blacklist_applied_before_limit(self):
        """Blacklisted entries do not use up the keyword limit."""
        raw = ["beautiful", "stunning"] + [f"keyword{i}" for i in range(50)]
        result = normalize_metadata({"keywords": raw})
        self.assertEqual(len(result.keywords), 50)
        self.assertEqual(result.keywords[0], "keyword0")

    def test_idempotent(self):
        """Normalized output is a fixed point."""
        samples = [
            {"title": "  " + "t" * 300, "description": "Desc-text" * 30,
             "keywords": ["A", "b", "a", " C ", "photo"] + [f"k{i}" for i in range(70)]},
            {"title": "x" * 200, "description": "", "keywords": []},
            {"title": "Short", "description": None, "keywords": ["One", "one", "TWO"]},
        ]
        for raw in samples:
            once = normalize_metadata(raw)
            twice = normalize_metadata(once)
            self.assertEqual(once, twice)

    def test_truncation_on_whitespace_keeps_full_length(self):
        """A cut that lands on a space still keeps exactly 200 characters."""
        result = normalize_metadata({"title": "a" * 199 + " " + "b" * 60, "description": "d" * 199 + " tail"})

        self.assertEqual(len(result.title), 200)
        self.assertEqual(result.title, "a" * 199 + " ")
        self.assertEqual(len(result.description), 200)

    def test_length_bounds(self):
        """Normalized output always respects the length limits."""
        for size in (0, 1, 199, 200, 201, 1000):
            result = normalize_metadata({
                "title": "t" * size,
                "description": "d" * size,
                "keywords": [f"w{i}" for i in range(size)],
            })
            self.assertLessEqual(len(result.title), 200)
            self.assertLessEqual(len(result.description), 200)
            self.assertLessEqual(len(result.keywords), 50)

    def test_accepts_metadata_instance(self):
        """A Metadata record can be normalized again."""
        metadata = Metadata(title=" Title ", description="Desc", keywords=["A", "a"])
        self.assertEqual(normalize_metadata(metadata), Metadata("Title", "Desc", ["a"]))


class TestValidateMetadata(unittest.TestCase):
    """Test cases for validate_metadata."""

    def test_valid_metadata_without_warnings(self):
        """Metadata within all recommended limits is valid with no warnings."""
        raw = {
            "title": "t" * 90,
            "description": "d" * 130,
            "keywords": [f"keyword{i}" for i in range(45)],
        }
        result = validate_metadata(raw)
        self.assertTrue(result.is_valid)
        self.assertEqual(result.errors, [])
        self.assertEqual(result.warnings, [])
        self.assertEqual(len(result.cleaned_data.keywords), 45)

    def test_empty_metadata_has_errors(self):
        """Empty fields are errors."""
        result = validate_metadata({})
        self.assertFalse(result.is_valid)
        self.assertEqual(len(result.errors), 3)

    def test_short_values_are_warnings(self):
        """Values below the recommended minimums only warn."""
        result = validate_metadata({"title": "Short title", "description": "Short", "keywords": ["sky"]})
        self.assertTrue(result.is_valid)
        self.assertEqual(len(result.warnings), 3)


if __name__ == '__main__':
    unittest.main()
