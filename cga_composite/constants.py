"""CGA palette, composite waveform tables and NTSC decoding constants."""

import numpy as np


def _frozen(array):
    array.setflags(write=False)
    return array


# --- CGA Palette ---
# Index bits 0-2 select the base hue, bit 3 is the intensity flag.
CGA_RGB_TABLE = _frozen(np.array([
    [0x00, 0x00, 0x00],   # Black
    [0x00, 0x00, 0xAA],   # Blue
    [0x00, 0xAA, 0x00],   # Green
    [0x00, 0xAA, 0xAA],   # Cyan
    [0xAA, 0x00, 0x00],   # Red
    [0xAA, 0x00, 0xAA],   # Magenta
    [0xAA, 0x55, 0x00],   # Brown
    [0xAA, 0xAA, 0xAA],   # Light gray
    [0x55, 0x55, 0x55],   # Dark gray
    [0x55, 0x55, 0xFF],   # Light blue
    [0x55, 0xFF, 0x55],   # Light green
    [0x55, 0xFF, 0xFF],   # Light cyan
    [0xFF, 0x55, 0x55],   # Light red
    [0xFF, 0x55, 0xFF],   # Light magenta
    [0xFF, 0xFF, 0x55],   # Yellow
    [0xFF, 0xFF, 0xFF],   # White
], dtype=np.uint8))

NUM_COLORS = 16
NUM_HUES = 8
BLACK_INDEX = 0
WHITE_INDEX = 15

# --- Composite Waveforms ---
# Luma contribution of each base hue for each half-dot of a color cycle
COLOR_GEN_HALF = _frozen(np.array([
    [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],   # Black
    [0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 0.0],   # Blue
    [1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0],   # Green
    [1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0],   # Cyan
    [0.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0, 0.0],   # Red
    [0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0],   # Magenta
    [1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0],   # Yellow
    [1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0],   # White
], dtype=np.float32))

COLOR_GEN_HALF_INT = _frozen(np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],   # Black
    [  0,   0,   0, 255, 255, 255, 255,   0],   # Blue
    [255, 255,   0,   0,   0,   0, 255, 255],   # Green
    [255,   0,   0,   0,   0, 255, 255, 255],   # Cyan
    [  0, 255, 255, 255, 255,   0,   0,   0],   # Red
    [  0,   0, 255, 255, 255, 255,   0,   0],   # Magenta
    [255, 255, 255,   0,   0,   0,   0, 255],   # Yellow
    [255, 255, 255, 255, 255, 255, 255, 255],   # White
], dtype=np.uint8))

# Half-dots that coincide with a color clock edge
COLOR_GEN_EDGES_HALF = _frozen(np.array([
    [False, False, False, False, False, False, False, False],   # Black
    [False, False, False, True,  False, False, True,  False],   # Blue
    [False, True,  False, False, False, False, True,  False],   # Green
    [True,  False, False, False, False, True,  False, False],   # Cyan
    [False, True,  False, False, True,  False, False, False],   # Red
    [False, False, True,  False, False, True,  False, False],   # Magenta
    [False, False, True,  False, False, False, False, True ],   # Yellow
    [False, False, False, False, False, False, False, False],   # White
], dtype=bool))

HALF_DOTS_PER_CYCLE = 8                 # 4 pixels x 2 half-dots
PIXELS_PER_CYCLE = HALF_DOTS_PER_CYCLE // 2

# --- Encoder Gains ---
EDGE_RESPONSE = 0.80                    # Slew-limited edge amplitude
LUMA_ATTENUATE = 0.75
INTENSITY_GAIN = 0.25
INTENSITY_GAIN_INT = 64

# Integer form of LUMA_ATTENUATE: (v * 768) >> 10 == v * 0.75
LUMA_ATTENUATE_MUL = 768
LUMA_ATTENUATE_SHIFT = 10

# Only these widths are accepted by the loader; 320 is doubled first.
SUPPORTED_WIDTHS = (320, 640)
NATIVE_WIDTH = 640

# --- NTSC Decoding ---
CCYCLE = 8                              # Samples per subcarrier cycle
CCYCLE_HALF = CCYCLE // 2

NARROW_TAPS = 15
NARROW_CUTOFF = 0.25                    # Cycles per sample
WIDE_TAPS = NARROW_TAPS * 2
WIDE_CUTOFF = 0.125
SUBCARRIER_FREQ = 0.125                 # Cycles per composite sample

TAU = 2.0 * np.pi

# YIQ to RGB
YIQ_TO_RGB = _frozen(np.array([
    [1.0,  0.956,  0.621],   # R
    [1.0, -0.272, -0.647],   # G
    [1.0, -1.106,  1.703],   # B
], dtype=np.float32))

# Chroma visualization: (gain * iq + bias) * 255
CHROMA_GAIN = 40.0
CHROMA_BIAS = 0.5

# --- Default Picture Controls ---
DEFAULT_HUE = 2.0                       # Radians
DEFAULT_SAT = 1.5
DEFAULT_LUMA = 1.0

# --- Method / Output Selectors ---
METHOD_FAST = 'fast'
METHOD_ACCURATE = 'accurate'
SAMPLE_METHODS = (METHOD_FAST, METHOD_ACCURATE)

OUTPUT_RGB = 'rgb'
OUTPUT_LUMA = 'luma'
OUTPUT_CHROMA = 'chroma'
OUTPUT_TYPES = (OUTPUT_RGB, OUTPUT_LUMA, OUTPUT_CHROMA)
