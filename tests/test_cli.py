import unittest
import tempfile
from pathlib import Path
from unittest import mock
import numpy as np
import cv2
from click.testing import CliRunner
from pngcompare.cli import aggregate_cmd, compare_cmd


class TestCompareCommand(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.a = self.tmp / "a.png"
        self.b = self.tmp / "b.png"
        cv2.imwrite(str(self.a), np.full((16, 16, 3), 80, dtype=np.uint8))
        cv2.imwrite(str(self.b), np.full((16, 16, 3), 80, dtype=np.uint8))

    def tearDown(self):
        self._tmp.cleanup()

    def test_success_creates_output_dir(self):
        out = self.tmp / "out"
        result = self.runner.invoke(compare_cmd, [str(self.a), str(self.b), str(out)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Similarity: 100.00", result.output)
        self.assertTrue((out / "a-b" / "info.txt").is_file())

    def test_lowers_opencv_log_level(self):
        with mock.patch.object(cv2.utils.logging, "setLogLevel") as set_level:
            result = self.runner.invoke(compare_cmd, [str(self.a), str(self.b), str(self.tmp / "out")])
        self.assertEqual(result.exit_code, 0, result.output)
        set_level.assert_called_once_with(cv2.utils.logging.LOG_LEVEL_WARNING)

    def test_wrong_argument_count(self):
        result = self.runner.invoke(compare_cmd, [str(self.a), str(self.b)])
        self.assertEqual(result.exit_code, 1)
        result = self.runner.invoke(compare_cmd, [str(self.a), str(self.b), "out", "extra"])
        self.assertEqual(result.exit_code, 1)

    def test_uncreatable_output_dir(self):
        out = self.tmp / "missing" / "nested"
        result = self.runner.invoke(compare_cmd, [str(self.a), str(self.b), str(out)])
        self.assertEqual(result.exit_code, 1)

    def test_mismatched_images(self):
        cv2.imwrite(str(self.b), np.zeros((8, 16, 3), dtype=np.uint8))
        result = self.runner.invoke(compare_cmd, [str(self.a), str(self.b), str(self.tmp / "out")])
        self.assertEqual(result.exit_code, 1)


class TestAggregateCommand(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.results = self.tmp / "results"
        self.output = self.tmp / "aggregate"
        image = np.zeros((16, 16, 3), dtype=np.uint8)
        cv2.imwrite(str(self.tmp / "a.png"), image)
        cv2.imwrite(str(self.tmp / "b.png"), 255 - image)
        self.runner.invoke(compare_cmd, [str(self.tmp / "a.png"), str(self.tmp / "b.png"), str(self.results)])

    def tearDown(self):
        self._tmp.cleanup()

    def test_aggregate(self):
        result = self.runner.invoke(aggregate_cmd, ["-i", str(self.results), "-o", str(self.output),
                                                    "-t", "50", "-d", "mask"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(sorted(p.name for p in (self.output / "a-b").iterdir()),
                         ["a_rgb.png", "b_rgb.png", "info.txt", "threshold_mask.png"])
        self.assertTrue((self.output / "command.txt").read_text().startswith("Command used: "))

    def test_nothing_qualifies(self):
        result = self.runner.invoke(aggregate_cmd, ["-i", str(self.results), "-o", str(self.output),
                                                    "-s", "more", "-t", "50"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertFalse(self.output.exists())

    def test_invalid_filter(self):
        result = self.runner.invoke(aggregate_cmd, ["-i", str(self.results), "-o", str(self.output),
                                                    "-s", "sideways"])
        self.assertEqual(result.exit_code, 1)

    def test_invalid_input_dir(self):
        result = self.runner.invoke(aggregate_cmd, ["-i", str(self.tmp / "nope"), "-o", str(self.output)])
        self.assertEqual(result.exit_code, 1)

    def test_missing_required_option(self):
        result = self.runner.invoke(aggregate_cmd, ["-i", str(self.results)])
        self.assertEqual(result.exit_code, 1)

if __name__ == "__main__":
    unittest.main()
