# pngcompare/compare.py
"""
One comparison: decode both images, score them, build the diffs and publish the result.
"""

from pathlib import Path
from typing import Union
import logging

from pngcompare.aggregator import ChannelAggregator
from pngcompare.diff_engine import DiffEngine
from pngcompare.exporter import ResultWriter
from pngcompare.io_utils import load_image, stem
from pngcompare.record import ComparisonResult

logging.basicConfig(level=logging.INFO)


def compare_files(path1: Union[str, Path], path2: Union[str, Path],
                  output_root: Union[str, Path]) -> ComparisonResult:
    img1 = load_image(path1)
    img2 = load_image(path2)

    logging.info("Computing SSIM...")
    score = ChannelAggregator().similarity_percent(img1, img2)
    result = ComparisonResult(name1=stem(path1), name2=stem(path2), score=score)

    logging.info("Computing deltas...")
    diff = DiffEngine().compute_diff(img1, img2)
    ResultWriter(output_root).write(result, img1, img2, diff)
    logging.info("Done.")
    return result
