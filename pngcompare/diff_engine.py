# pngcompare/diff_engine.py
"""
Absolute difference images (native and HSV) and threshold mask generation.
"""

from dataclasses import dataclass
import numpy as np
import cv2
import logging

from pngcompare.aggregator import check_comparable
from pngcompare.config import MASK_THRESHOLD, MASK_ON

logging.basicConfig(level=logging.INFO)

_TO_BGR = {1: cv2.COLOR_GRAY2BGR, 4: cv2.COLOR_BGRA2BGR}


@dataclass(frozen=True)
class DiffArtifacts:
    absdiff_rgb: np.ndarray
    absdiff_hsv: np.ndarray
    mask: np.ndarray


def to_hsv(img: np.ndarray) -> np.ndarray:
    channels = 1 if img.ndim == 2 else img.shape[2]
    if channels == 2:
        # gray + alpha: hue comes from the gray channel only
        img = np.ascontiguousarray(img[..., 0])
        channels = 1
    if channels in _TO_BGR:
        img = cv2.cvtColor(img, _TO_BGR[channels])
    return cv2.cvtColor(img, cv2.COLOR_BGR2HSV)


class DiffEngine:
    def __init__(self, threshold: float = MASK_THRESHOLD):
        self.threshold = threshold

    def threshold_mask(self, absdiff_hsv: np.ndarray) -> np.ndarray:
        """255 where the Euclidean norm of the HSV difference exceeds the threshold, else 0."""
        dist = np.sqrt(np.sum(absdiff_hsv.astype(np.float32) ** 2, axis=2))
        return np.where(dist > self.threshold, MASK_ON, 0).astype(np.uint8)

    def compute_diff(self, imgA: np.ndarray, imgB: np.ndarray) -> DiffArtifacts:
        # HSV works better than the native space for the mask
        check_comparable(imgA, imgB)
        absdiff_rgb = cv2.absdiff(imgA, imgB)
        absdiff_hsv = cv2.absdiff(to_hsv(imgA), to_hsv(imgB))
        mask = self.threshold_mask(absdiff_hsv)
        return DiffArtifacts(absdiff_rgb=absdiff_rgb, absdiff_hsv=absdiff_hsv, mask=mask)
