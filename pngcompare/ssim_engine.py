# pngcompare/ssim_engine.py
"""
Structural similarity of a single channel pair using OpenCV Gaussian windows.

                 (2*mu_x*mu_y + c1)(2*sigma_xy + c2)
  SSIM(x,y) = --------------------------------------------
              (mu_x^2 + mu_y^2 + c1)(sigma_x^2 + sigma_y^2 + c2)

Comparing a black and a white image does not give exactly 0 because of the
stabilization constants and the float32 conversion.
"""

import numpy as np
import cv2
import logging

from pngcompare.config import SSIM_WINDOW, SSIM_SIGMA, SSIM_C1, SSIM_C2

logging.basicConfig(level=logging.INFO)


class InvalidComparisonError(ValueError):
    """The two operands cannot be compared (channels, size or depth)."""


def channel_count(img: np.ndarray) -> int:
    return 1 if img.ndim == 2 else img.shape[2]


class SSIMEngine:
    def __init__(self):
        self.window = SSIM_WINDOW
        self.sigma = SSIM_SIGMA
        self.c1 = SSIM_C1
        self.c2 = SSIM_C2

    def _blur(self, img: np.ndarray) -> np.ndarray:
        return cv2.GaussianBlur(img, self.window, self.sigma)

    def ssim_map(self, chan1: np.ndarray, chan2: np.ndarray) -> np.ndarray:
        """
        Per-pixel SSIM of two single channel images, same size as the inputs.
        Raises InvalidComparisonError if either input has more than one channel
        or the sizes differ.
        """
        if channel_count(chan1) != 1 or channel_count(chan2) != 1:
            raise InvalidComparisonError("ssim_map(): inputs should only have one channel")
        if chan1.shape[:2] != chan2.shape[:2]:
            raise InvalidComparisonError(
                f"ssim_map(): size mismatch: {chan1.shape[:2]} vs {chan2.shape[:2]}"
            )

        x = chan1.reshape(chan1.shape[:2]).astype(np.float32)
        y = chan2.reshape(chan2.shape[:2]).astype(np.float32)

        mu_x = self._blur(x)
        mu_y = self._blur(y)
        mu_x_2 = mu_x * mu_x
        mu_y_2 = mu_y * mu_y
        mu_x_mu_y = mu_x * mu_y

        sigma_x_2 = self._blur(x * x) - mu_x_2
        sigma_y_2 = self._blur(y * y) - mu_y_2
        sigma_xy = self._blur(x * y) - mu_x_mu_y

        numerator = (2 * mu_x_mu_y + self.c1) * (2 * sigma_xy + self.c2)
        denominator = (mu_x_2 + mu_y_2 + self.c1) * (sigma_x_2 + sigma_y_2 + self.c2)
        return numerator / denominator

    def score_channel(self, chan1: np.ndarray, chan2: np.ndarray) -> float:
        """Mean of the SSIM map, in [-1, 1]."""
        return float(np.mean(self.ssim_map(chan1, chan2)))
