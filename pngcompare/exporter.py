# pngcompare/exporter.py
"""
Writes a comparison result directory: renamed inputs, diff images, mask and info.txt.

Everything is written to a staging directory next to the target first and then
published with a rename, so readers never see a half written result. An
existing result for the same name pair is replaced as a whole.
"""

from pathlib import Path
from typing import Union
import numpy as np
import os
import shutil
import tempfile
import logging

from pngcompare.config import ABSDIFF_RGB, ABSDIFF_HSV, THRESHOLD_MASK, INFO_FILE
from pngcompare.diff_engine import DiffArtifacts
from pngcompare.io_utils import save_image
from pngcompare.record import ComparisonResult, format_info

logging.basicConfig(level=logging.INFO)


class ResultWriter:
    def __init__(self, output_root: Union[str, Path]):
        self.output_root = Path(output_root)

    def result_dir(self, result: ComparisonResult) -> Path:
        return self.output_root / result.dirname

    def _write_files(self, target: Path, result: ComparisonResult,
                     img1: np.ndarray, img2: np.ndarray, diff: DiffArtifacts):
        save_image(target / result.file1, img1)
        save_image(target / result.file2, img2)
        save_image(target / ABSDIFF_RGB, diff.absdiff_rgb)
        save_image(target / ABSDIFF_HSV, diff.absdiff_hsv)
        save_image(target / THRESHOLD_MASK, diff.mask)
        with open(target / INFO_FILE, "w", encoding="utf-8") as f:
            f.write(format_info(result.file1, result.file2, result.score))

    def _publish(self, staging: Path, target: Path):
        if not target.is_dir():
            os.replace(staging, target)
            return
        logging.warning(f"Overwriting previous result {target}...")
        trash = Path(tempfile.mkdtemp(prefix=f".{target.name}.old.", dir=self.output_root))
        try:
            os.replace(target, trash / target.name)
            try:
                os.replace(staging, target)
            except OSError:
                os.replace(trash / target.name, target)
                raise
        finally:
            shutil.rmtree(trash, ignore_errors=True)

    def write(self, result: ComparisonResult, img1: np.ndarray, img2: np.ndarray,
              diff: DiffArtifacts) -> Path:
        target = self.result_dir(result)
        staging = Path(tempfile.mkdtemp(prefix=f".{target.name}.", dir=self.output_root))
        staging.chmod(0o755)
        try:
            self._write_files(staging, result, img1, img2, diff)
            self._publish(staging, target)
        except Exception:
            logging.error(f"Failed to write result directory '{target}'")
            shutil.rmtree(staging, ignore_errors=True)
            raise
        return target
