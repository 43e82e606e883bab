from pathlib import Path
from typing import Callable, List, Sequence

import numpy as np
import pytest
from PIL import Image

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
GRAY = (128, 128, 128, 255)
CLEAR = (0, 0, 0, 0)


def rgba_image(rows: Sequence[Sequence[Sequence[int]]]) -> np.ndarray:
    """Build a uint8 (H,W,4) image from nested rows of RGBA tuples."""
    return np.array(rows, dtype=np.uint8).reshape(len(rows), len(rows[0]), 4)


@pytest.fixture
def make_image() -> Callable[[List[List[Sequence[int]]]], np.ndarray]:
    return rgba_image


@pytest.fixture
def write_png(tmp_path: Path) -> Callable[[str, np.ndarray], Path]:
    def _write(name: str, image: np.ndarray) -> Path:
        path = tmp_path / name
        Image.fromarray(image).save(path)
        return path

    return _write
