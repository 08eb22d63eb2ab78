# pngcompare/io_utils.py
"""
Image decode/encode through OpenCV. Arrays stay in OpenCV's BGR(A) order.
"""

from pathlib import Path
from typing import Union
import cv2
import numpy as np


def load_image(path: Union[str, Path], flags: int = cv2.IMREAD_COLOR) -> np.ndarray:
    path = Path(path)
    img = cv2.imread(str(path), flags)
    if img is None:
        raise FileNotFoundError(f"Could not read image: {path}")
    return img


def save_image(path: Union[str, Path], img: np.ndarray) -> None:
    path = Path(path)
    if not cv2.imwrite(str(path), img):
        raise OSError(f"Could not write image: {path}")


def stem(path: Union[str, Path]) -> str:
    # ../a/foo.png -> foo
    return Path(path).stem
