"""CGA Composite Artifact Color Simulator."""

from .palette import rgb_to_cga, quantize_frame, indices_to_rgb
from .encoder import encode_frame, encode_indices
from .decoder import decode_frame, decode_all, box_filter_rgb
from .filters import narrow_weights, wide_weights
from .colorbars import generate_colorbars, generate_colorbar_indices
