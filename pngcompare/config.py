# SSIM window. 11x11 Gaussian with sigma 1.5 as recommended in the literature.
SSIM_WINDOW = (11, 11)
SSIM_SIGMA = 1.5

# Stabilization constants: C1 = (K1*L)^2, C2 = (K2*L)^2, L = dynamic range.
# Only 8-bit images are supported, so L is fixed.
SSIM_K1 = 0.01
SSIM_K2 = 0.03
DYNAMIC_RANGE = 255
SSIM_C1 = (SSIM_K1 * DYNAMIC_RANGE) ** 2  # 6.5025
SSIM_C2 = (SSIM_K2 * DYNAMIC_RANGE) ** 2  # 58.5225

# Euclidean norm of the HSV difference above which a pixel is flagged
MASK_THRESHOLD = 25.0
MASK_ON = 255

# Result directory layout
NAME_SEPARATOR = "-"
SOURCE_SUFFIX = "_rgb.png"
ABSDIFF_RGB = "absdiff_rgb.png"
ABSDIFF_HSV = "absdiff_hsv.png"
THRESHOLD_MASK = "threshold_mask.png"
INFO_FILE = "info.txt"

# Aggregate defaults
COMMAND_FILE = "command.txt"
DEFAULT_SCORE_FILTER = "less"
DEFAULT_DIFF_FLAGS = "rgb,hsv,mask"
DEFAULT_THRESHOLD = 100.0
