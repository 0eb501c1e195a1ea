import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from greekreference import paths


class PathsTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_data_dir_comes_from_environment(self):
        target = str(Path(self.temp_dir.name) / "data")
        with mock.patch.dict(os.environ, {"GREEKREFERENCE_DATA_DIR": target}):
            self.assertEqual(paths.get_data_dir(), target)
            self.assertTrue(os.path.isdir(target))
            self.assertEqual(paths.get_reference_db_path(), os.path.join(target, "reference.db"))
            self.assertEqual(paths.get_app_data_db_path(), os.path.join(target, "appdata.db"))

    def test_data_dir_defaults_to_home(self):
        with mock.patch.dict(os.environ, {"GREEKREFERENCE_DATA_DIR": ""}):
            with mock.patch("os.path.expanduser", return_value=self.temp_dir.name):
                self.assertEqual(paths.get_data_dir(), os.path.join(self.temp_dir.name, ".greekreference"))


if __name__ == "__main__":
    unittest.main()
