"""Image file loading and saving for the composite pipeline."""

import cv2
import numpy as np

from .constants import SUPPORTED_WIDTHS, NATIVE_WIDTH


def load_image(path):
    """Load an image file as RGBA (H x W x 4, uint8).

    16-bit images keep their high byte.

    Raises:
        ValueError: The file cannot be read as an 8 or 16-bit image.
    """
    frame = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if frame is None:
        raise ValueError(f"Cannot open image '{path}'")
    if frame.dtype == np.uint16:
        frame = (frame >> 8).astype(np.uint8)
    elif frame.dtype != np.uint8:
        raise ValueError(f"Unsupported sample type {frame.dtype} in '{path}'")

    if frame.ndim == 2:
        return cv2.cvtColor(frame, cv2.COLOR_GRAY2RGBA)
    if frame.shape[2] == 4:
        return cv2.cvtColor(frame, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA)


def prepare_frame(frame):
    """Bring a frame to the native 640 pixel CGA width.

    320 pixel frames are doubled in both dimensions with nearest-neighbour
    scaling; 640 pixel frames pass through.

    Raises:
        ValueError: Any other width.
    """
    h, w = frame.shape[:2]
    if w not in SUPPORTED_WIDTHS:
        raise ValueError(f"Unsupported image width: {w}")
    if w == NATIVE_WIDTH:
        return frame
    return cv2.resize(frame, (w * 2, h * 2), interpolation=cv2.INTER_NEAREST)


def save_composite(path, signal):
    """Write a composite signal (H x 2W, uint8) as a grayscale image."""
    if not cv2.imwrite(str(path), np.ascontiguousarray(signal, dtype=np.uint8)):
        raise ValueError(f"Cannot write image '{path}'")


def save_rgba(path, frame):
    """Write an RGBA frame (H x W x 4, uint8)."""
    bgra = cv2.cvtColor(np.ascontiguousarray(frame), cv2.COLOR_RGBA2BGRA)
    if not cv2.imwrite(str(path), bgra):
        raise ValueError(f"Cannot write image '{path}'")
