"""Nearest-color quantization of RGB frames to the 16-color CGA palette."""

import numpy as np

from .constants import CGA_RGB_TABLE, BLACK_INDEX, WHITE_INDEX

_PALETTE_I32 = CGA_RGB_TABLE.astype(np.int32)


def rgb_distance_squared(a, b):
    """Squared Euclidean distance between two RGB colors.

    Only the relative magnitude is ever compared, so no square root.
    """
    dr = int(a[0]) - int(b[0])
    dg = int(a[1]) - int(b[1])
    db = int(a[2]) - int(b[2])
    return dr * dr + dg * dg + db * db


def rgb_to_cga(rgb):
    """Return the CGA palette index (0-15) nearest to an (r, g, b) color.

    Ties go to the lower index.
    """
    r, g, b = int(rgb[0]), int(rgb[1]), int(rgb[2])
    if r == 0 and g == 0 and b == 0:
        return BLACK_INDEX
    if r == 255 and g == 255 and b == 255:
        return WHITE_INDEX

    best_index = 0
    best_distance = None
    for i, entry in enumerate(CGA_RGB_TABLE):
        distance = rgb_distance_squared((r, g, b), entry)
        if best_distance is None or distance < best_distance:
            best_index = i
            best_distance = distance
    return best_index


def quantize_frame(frame):
    """Convert an RGB or RGBA frame (H x W x 3|4, uint8) to CGA indices.

    Vectorized equivalent of calling rgb_to_cga on every pixel. argmin
    returns the first minimum, which preserves the lower-index tie-break.

    Returns:
        Index raster as numpy array (H x W, uint8).
    """
    rgb = frame[..., :3].astype(np.int32)
    diff = rgb[..., np.newaxis, :] - _PALETTE_I32          # (H, W, 16, 3)
    distances = np.einsum('...c,...c->...', diff, diff)    # (H, W, 16)
    return np.argmin(distances, axis=-1).astype(np.uint8)


def indices_to_rgb(indices):
    """Expand a CGA index raster (H x W) to RGB (H x W x 3, uint8)."""
    return CGA_RGB_TABLE[np.asarray(indices, dtype=np.intp) & 0x0F]
