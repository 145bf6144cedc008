"""
Tests for the keyword blacklist.
"""
import unittest

from stock_metadata.blacklist import (
    BLACKLIST_BRANDS,
    BLACKLIST_WORDS,
    FULL_BLACKLIST,
    filter_blacklisted,
    is_blacklisted,
)


class TestIsBlacklisted(unittest.TestCase):
    """Test cases for is_blacklisted."""

    def test_subjective_and_spam_words(self):
        """Subjective and spam words are blacklisted."""
        for word in ('beautiful', 'stunning', '4k', 'stock photo', 'copyright', 'image'):
            self.assertTrue(is_blacklisted(word), word)

    def test_brands_case_insensitive(self):
        """Brand names match regardless of case."""
        self.assertTrue(is_blacklisted('Apple'))
        self.assertTrue(is_blacklisted('NIKE'))
        self.assertTrue(is_blacklisted('samsung'))
        self.assertTrue(is_blacklisted('Louis Vuitton'))

    def test_allowed_words(self):
        """Ordinary descriptive words are allowed."""
        for word in ('nature', 'mountain', 'coffee', 'business', 'sunset'):
            self.assertFalse(is_blacklisted(word), word)

    def test_no_substring_matching(self):
        """Only whole entries match, never substrings."""
        self.assertFalse(is_blacklisted('beautifully'))
        self.assertFalse(is_blacklisted('pineapple'))
        self.assertFalse(is_blacklisted('photo booth'))
        self.assertFalse(is_blacklisted(' beautiful '))


class TestFilterBlacklisted(unittest.TestCase):
    """Test cases for filter_blacklisted."""

    def test_removes_blacklisted_words_in_order(self):
        """Blacklisted words are dropped and order is kept."""
        result = filter_blacklisted(['nature', 'beautiful', 'mountain', 'stunning', 'forest'])
        self.assertEqual(result, ['nature', 'mountain', 'forest'])

    def test_removes_brands(self):
        """Brand names are dropped."""
        result = filter_blacklisted(['phone', 'apple', 'technology', 'samsung'])
        self.assertEqual(result, ['phone', 'technology'])

    def test_all_blacklisted(self):
        """A list of only blacklisted words becomes empty."""
        self.assertEqual(filter_blacklisted(['beautiful', 'gorgeous', 'stunning']), [])

    def test_empty_list(self):
        """An empty list stays empty."""
        self.assertEqual(filter_blacklisted([]), [])


class TestFullBlacklist(unittest.TestCase):
    """Test cases for the combined blacklist."""

    def test_contains_both_categories(self):
        """The combined set holds every word and brand in lowercase."""
        self.assertGreater(len(FULL_BLACKLIST), 50)
        for entry in BLACKLIST_WORDS + BLACKLIST_BRANDS:
            self.assertIn(entry.lower(), FULL_BLACKLIST)


if __name__ == '__main__':
    unittest.main()
