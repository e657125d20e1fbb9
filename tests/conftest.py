"""
Shared fixtures: synthetic RGBA screens and conditions
"""

import numpy as np
import pytest


def noise_screen(width, height, seed=0):
    """Random RGBA screen, opaque"""
    rng = np.random.default_rng(seed)
    screen = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    screen[:, :, 3] = 255
    return screen


def checkerboard(width, height, color_a, color_b, square=10):
    """Two color RGBA checkerboard, color_a on the (0, 0) square"""
    board = np.empty((height, width, 4), dtype=np.uint8)
    rows = (np.arange(height) // square)[:, None]
    cols = (np.arange(width) // square)[None, :]
    on_a = (rows + cols) % 2 == 0
    board[on_a] = (*color_a, 255)
    board[~on_a] = (*color_b, 255)
    return board


def paste(screen, patch, x, y):
    """Copy of screen with patch pasted at (x, y)"""
    result = screen.copy()
    height, width = patch.shape[:2]
    result[y:y + height, x:x + width] = patch
    return result


@pytest.fixture
def screen_1000x800():
    return noise_screen(1000, 800, seed=42)


def blocky_screen(width, height, block=4, seed=0):
    """Random RGBA screen made of block x block squares, survives downscaling at any offset"""
    rng = np.random.default_rng(seed)
    cells = rng.integers(0, 256, size=(height // block + 1, width // block + 1, 4), dtype=np.uint8)
    screen = np.repeat(np.repeat(cells, block, axis=0), block, axis=1)[:height, :width].copy()
    screen[:, :, 3] = 255
    return screen
