"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image, ImageDraw

from imgdupe.models import EngineConfig, ObservedImage


# 8x8 block patterns, roughly half the cells white so average hash is stable
PATTERN_A = [
    "10110010",
    "01101001",
    "11010110",
    "00101101",
    "10011010",
    "01100101",
    "11001011",
    "00110100",
]
PATTERN_B = [row.translate(str.maketrans("01", "10")) for row in PATTERN_A]


def make_pattern_image(path: Path, size: tuple, pattern=PATTERN_A) -> Path:
    """Draw an 8x8 black/white block pattern scaled to size and save it."""
    width, height = size
    img = Image.new('RGB', size, color='black')
    draw = ImageDraw.Draw(img)
    cell_w = width / 8
    cell_h = height / 8
    for y, row in enumerate(pattern):
        for x, cell in enumerate(row):
            if cell == "1":
                draw.rectangle(
                    [
                        int(x * cell_w),
                        int(y * cell_h),
                        int((x + 1) * cell_w) - 1,
                        int((y + 1) * cell_h) - 1,
                    ],
                    fill='white',
                )
    img.save(path, 'PNG')
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - large.png (800x600) and small.png (640x480): same picture, different area
        - copy.png: byte-identical copy of large.png
        - unique.png: inverted pattern, matches nothing
        - corrupted.png: not an image despite the extension
    """
    images = {}

    images['large'] = str(make_pattern_image(temp_dir / "large.png", (800, 600)))
    images['small'] = str(make_pattern_image(temp_dir / "small.png", (640, 480)))

    copy_path = temp_dir / "copy.png"
    shutil.copyfile(images['large'], copy_path)
    images['copy'] = str(copy_path)

    images['unique'] = str(make_pattern_image(temp_dir / "unique.png", (200, 200), PATTERN_B))

    corrupted = temp_dir / "corrupted.png"
    corrupted.write_text("not an image")
    images['corrupted'] = str(corrupted)

    return images


@pytest.fixture
def make_file(temp_dir):
    """Factory creating small placeholder files inside temp_dir."""
    def _make(name: str, content: bytes = b"data") -> str:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return str(path)
    return _make


@pytest.fixture
def observe():
    """Factory building ObservedImage values with opaque fingerprints."""
    def _observe(path: str, width: int, height: int, fingerprint="fp"):
        return ObservedImage(path=path, width=width, height=height, fingerprint=fingerprint)
    return _observe


@pytest.fixture
def engine_config(temp_dir):
    """Default engine configuration rooted at temp_dir."""
    return EngineConfig(root=temp_dir, workers=2)
