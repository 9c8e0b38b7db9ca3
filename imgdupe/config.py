"""
Configuration constants for imgdupe.

This module contains all configurable settings including:
- Supported image extensions
- Fingerprint family defaults and the sensitivity offset
- Quarantine naming scheme (directory, markers, pair tag length)
"""

# Extensions considered for decoding (Pillow handles the actual sniffing)
IMAGE_EXTENSIONS = {
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff', '.tif',
    '.heic', '.heif',
    '.pbm', '.pgm', '.ppm', '.pnm',
    '.tga', '.ico',
}

# Default fingerprint family (exact-bucket average hash)
DEFAULT_ALGORITHM = 'avg'

# Operator-facing sensitivity for distance-scored families.
# Lower = stricter matching, negative values disable fuzzy matching.
DEFAULT_SENSITIVITY = 0

# Distance-scored families report scores shifted by this amount, and the
# configured sensitivity is shifted the same way before it reaches the index.
SENSITIVITY_OFFSET = 100

# Hash size for distance-scored families (16 -> 256-bit hash)
DISTANCE_HASH_SIZE = 16

# Default number of parallel decode/hash workers
DEFAULT_WORKERS = 4

# Quarantine directory, created under the run root
QUARANTINE_DIR_NAME = 'duplicates'

# Disposition markers embedded in quarantined file names
KEEP_MARKER = '_KEPT_'
DISCARD_MARKER = '_GONE_'

# Number of hex digits of the pair digest kept in file names
PAIR_TAG_LENGTH = 5

# Decompression bomb limit (pixels)
MAX_IMAGE_PIXELS = 500_000_000

# Alternative pair tags tried when a quarantine name is already taken
PAIR_TAG_ATTEMPTS = 100
