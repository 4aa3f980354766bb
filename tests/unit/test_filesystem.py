"""
Unit tests for filesystem helpers.
"""

import pytest

from neo_toolkit.core.exceptions import UploadIOError
from neo_toolkit.utils.filesystem import create_dir_if_not_exist, file_extension, safe_base_name


class TestCreateDirIfNotExist:
    """Test directory creation."""

    def test_creates_missing_directory(self, tmp_path):
        """Test a missing directory is created."""
        target = tmp_path / "myDir"
        result = create_dir_if_not_exist(target)
        assert result == target
        assert target.is_dir()

    def test_is_idempotent(self, tmp_path):
        """Test calling twice succeeds both times."""
        target = tmp_path / "myDir"
        create_dir_if_not_exist(target)
        create_dir_if_not_exist(str(target))
        assert target.is_dir()

    def test_creates_parents(self, tmp_path):
        """Test intermediate directories are created."""
        target = tmp_path / "a" / "b" / "c"
        create_dir_if_not_exist(target)
        assert target.is_dir()

    def test_file_in_the_way(self, tmp_path):
        """Test a regular file at the path is reported as an IO failure."""
        target = tmp_path / "occupied"
        target.write_text("not a directory")
        with pytest.raises(UploadIOError) as exc_info:
            create_dir_if_not_exist(target)
        assert exc_info.value.details["path"] == str(target)


class TestSafeBaseName:
    """Test reduction of client filenames to base names."""

    @pytest.mark.parametrize("filename,expected", [
        ("img.png", "img.png"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\me\\photo.jpg", "photo.jpg"),
        ("dir/", ""),
        ("..", ""),
        (".", ""),
        ("", ""),
    ])
    def test_base_names(self, filename, expected):
        """Test path components are stripped."""
        assert safe_base_name(filename) == expected


class TestFileExtension:
    """Test extension extraction from the last dot."""

    @pytest.mark.parametrize("filename,expected", [
        ("img.png", ".png"),
        ("archive.tar.gz", ".gz"),
        (".htaccess", ".htaccess"),
        ("README", ""),
        ("trailing.", "."),
        ("", ""),
    ])
    def test_extensions(self, filename, expected):
        """Test the suffix starting at the last dot is returned."""
        assert file_extension(filename) == expected
