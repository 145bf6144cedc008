"""
Tests for file backups.
"""
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from stock_metadata.backup import create_backup_file, get_default_backup_path


class TestBackup(unittest.TestCase):
    """Test cases for create_backup_file."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.source = os.path.join(self.temp_dir, 'photo.jpg')
        with open(self.source, 'wb') as f:
            f.write(b'\xff\xd8image-bytes')

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    @patch('stock_metadata.backup.time.time', return_value=1700000000.5)
    def test_backup_copy(self, mock_time):
        """The copy is named with a millisecond timestamp and keeps the content."""
        backup_dir = os.path.join(self.temp_dir, 'nested', 'backups')

        backup_path = create_backup_file(self.source, backup_dir)

        self.assertEqual(backup_path, os.path.join(backup_dir, '1700000000500_photo.jpg'))
        with open(backup_path, 'rb') as f:
            self.assertEqual(f.read(), b'\xff\xd8image-bytes')
        self.assertTrue(os.path.exists(self.source))

    def test_default_directory(self):
        """An empty directory uses the default backup location."""
        home = os.path.join(self.temp_dir, 'home')
        with patch.dict(os.environ, {'HOME': home}):
            expected_dir = get_default_backup_path()
            backup_path = create_backup_file(self.source, "")

        self.assertEqual(os.path.dirname(backup_path), expected_dir)
        self.assertTrue(expected_dir.startswith(home))

    def test_missing_source(self):
        """Backing up a missing file raises."""
        with self.assertRaises(OSError):
            create_backup_file(os.path.join(self.temp_dir, 'missing.jpg'), self.temp_dir)


if __name__ == '__main__':
    unittest.main()
