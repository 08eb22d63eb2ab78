# pngcompare/aggregator.py
"""
Per-channel SSIM averaged over images with 1-4 channels.
"""

from typing import List, Optional
import numpy as np
import cv2
import logging

from pngcompare.ssim_engine import SSIMEngine, InvalidComparisonError, channel_count

logging.basicConfig(level=logging.INFO)


def check_comparable(img1: np.ndarray, img2: np.ndarray) -> int:
    """Return the shared channel count or raise InvalidComparisonError."""
    if img1.dtype != np.uint8 or img2.dtype != np.uint8:
        raise InvalidComparisonError(
            f"only 8-bit images are supported, got {img1.dtype} and {img2.dtype}"
        )
    if img1.shape[:2] != img2.shape[:2]:
        raise InvalidComparisonError(
            f"inputs should be of same size: {img1.shape[:2]} vs {img2.shape[:2]}"
        )
    channels = channel_count(img1)
    if channels != channel_count(img2):
        raise InvalidComparisonError(
            f"inputs should have same number of channels: {channels} vs {channel_count(img2)}"
        )
    if not 1 <= channels <= 4:
        raise InvalidComparisonError(f"unsupported channel count: {channels}")
    return channels


def _split(img: np.ndarray) -> List[np.ndarray]:
    if img.ndim == 2:
        return [img]
    return list(cv2.split(img))


class ChannelAggregator:
    def __init__(self, engine: Optional[SSIMEngine] = None):
        self.engine = engine or SSIMEngine()

    def channel_scores(self, img1: np.ndarray, img2: np.ndarray) -> List[float]:
        check_comparable(img1, img2)
        channels1 = _split(img1)
        channels2 = _split(img2)
        return [self.engine.score_channel(a, b) for a, b in zip(channels1, channels2)]

    def score(self, img1: np.ndarray, img2: np.ndarray) -> float:
        scores = self.channel_scores(img1, img2)
        return sum(scores) / len(scores)

    def similarity_percent(self, img1: np.ndarray, img2: np.ndarray) -> float:
        return 100.0 * self.score(img1, img2)
