"""
Tests for the metadata editor.
"""
import unittest

from stock_metadata.editor import MetadataEditor
from stock_metadata.models import Metadata, MetadataResult


class TestMetadataEditor(unittest.TestCase):
    """Test cases for MetadataEditor."""

    def setUp(self):
        """Set up test fixtures."""
        self.editor = MetadataEditor()
        self.editor.load_from_metadata(
            MetadataResult(title="Sky", description="Blue sky", keywords=["sky", "cloud", "blue"], score=12)
        )

    def test_load_clears_changes(self):
        self.assertEqual(self.editor.title, "Sky")
        self.assertEqual(self.editor.keywords, ["sky", "cloud", "blue"])
        self.assertFalse(self.editor.has_changes)

    def test_setters_mark_changes(self):
        self.editor.set_title("New title")
        self.assertTrue(self.editor.has_changes)
        self.assertEqual(self.editor.get_metadata().title, "New title")

    def test_add_keyword(self):
        """Keywords are lowercased; empty ones and duplicates are refused."""
        self.assertTrue(self.editor.add_keyword("  Horizon "))
        self.assertFalse(self.editor.add_keyword("SKY"))
        self.assertFalse(self.editor.add_keyword("   "))
        self.assertEqual(self.editor.keywords, ["sky", "cloud", "blue", "horizon"])

    def test_remove_keyword(self):
        self.editor.remove_keyword(1)
        self.editor.remove_keyword(10)
        self.assertEqual(self.editor.keywords, ["sky", "blue"])

    def test_reorder_keywords(self):
        self.editor.reorder_keywords(2, 0)
        self.assertEqual(self.editor.keywords, ["blue", "sky", "cloud"])
        self.assertTrue(self.editor.has_changes)

    def test_edits_do_not_touch_source(self):
        """The loaded record is not modified by edits."""
        source = Metadata(title="A", keywords=["x"])
        editor = MetadataEditor()
        editor.load_from_metadata(source)

        editor.add_keyword("y")

        self.assertEqual(source.keywords, ["x"])
        self.assertIsInstance(editor.get_metadata(), Metadata)

    def test_score_follows_edits(self):
        before = self.editor.score()
        self.editor.set_keywords([f"k{i}" for i in range(45)])
        self.assertEqual(self.editor.score(), before - 1 + 40)

    def test_copy_text(self):
        self.assertEqual(
            self.editor.copy_text(),
            "Title: Sky\n\nDescription: Blue sky\n\nKeywords: sky, cloud, blue"
        )

    def test_reset(self):
        self.editor.reset()
        self.assertEqual(self.editor.get_metadata(), Metadata())
        self.assertFalse(self.editor.has_changes)


if __name__ == '__main__':
    unittest.main()
