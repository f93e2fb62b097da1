import os
import tempfile
import unittest

from hashlens.common.settings import load_settings, DEFAULT_SETTINGS
from hashlens.common.errors import SettingsFileError

class TestLoadSettings(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, content):
        path = os.path.join(self.tmpdir.name, "settings.yaml")
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_missing_file(self):
        self.assertEqual(load_settings(os.path.join(self.tmpdir.name, "nope.yaml")), DEFAULT_SETTINGS)

    def test_empty_file(self):
        self.assertEqual(load_settings(self._write("")), DEFAULT_SETTINGS)

    def test_values(self):
        settings = load_settings(self._write("loglevel: debug\nmax_workers: 2\n"))
        self.assertEqual(settings["loglevel"], "debug")
        self.assertEqual(settings["max_workers"], 2)
        self.assertIsNone(settings["catalog"])

    def test_unknown_key_ignored(self):
        with self.assertLogs("hashlens.common.settings", level="WARNING"):
            settings = load_settings(self._write("colour: blue\n"))
        self.assertNotIn("colour", settings)

    def test_invalid(self):
        for content in ["- a\n- b\n", "max_workers: 0\n", "max_workers: many\n", "loglevel: [\n",
                        "loglevel: verbose\n", "loglevel: 10\n", "max_workers: true\n"]:
            with self.assertRaises(SettingsFileError, msg=content):
                load_settings(self._write(content))

    def test_loglevel_case(self):
        self.assertEqual(load_settings(self._write("loglevel: INFO\n"))["loglevel"], "info")

if __name__ == '__main__':
    unittest.main()
