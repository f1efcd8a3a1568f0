# Puzzle/overlay.py
"""
Debug overlays: draw solved boards and maps onto numpy canvases with OpenCV
and save them as PNG images.
"""
from __future__ import annotations
import os
from typing import Optional, Tuple

import cv2
import numpy as np

from Camping.map import Map, Tile
from Sudoku.board import Board

# BGR colours
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRAY = (170, 170, 170)
GIVEN_COLOR = (30, 30, 30)
SOLVED_COLOR = (200, 90, 20)
TREE_COLOR = (40, 140, 40)
TENT_COLOR = (20, 120, 230)


def _put_centered(img: np.ndarray, text: str, center: Tuple[int, int],
                  scale: float, color, thickness: int = 2) -> None:
    (tw, th), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, scale, thickness)
    cx, cy = center
    cv2.putText(img, text, (cx - tw // 2, cy + th // 2),
                cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)


def render_sudoku(board: Board, givens: Optional[Board] = None, pitch: int = 48) -> np.ndarray:
    """
    Draw a 9x9 board. Digits present in `givens` are drawn dark, digits the
    solver filled in are drawn in the accent colour.
    """
    size = pitch * 9
    img = np.full((size + 1, size + 1, 3), 255, np.uint8)

    for loc, value in board.values():
        if value is None:
            continue
        given = givens is None or givens[loc] is not None
        color = GIVEN_COLOR if given else SOLVED_COLOR
        center = (loc.col * pitch + pitch // 2, loc.row * pitch + pitch // 2)
        _put_centered(img, str(value), center, pitch / 40.0, color)

    for i in range(10):
        thickness = 3 if i % 3 == 0 else 1
        p = min(i * pitch, size)
        cv2.line(img, (p, 0), (p, size), BLACK, thickness)
        cv2.line(img, (0, p), (size, p), BLACK, thickness)
    return img


def render_camping(map: Map, pitch: int = 40) -> np.ndarray:
    """Draw a map with its requirements along the top and left margins"""
    height, width = map.dim
    margin = pitch
    img = np.full((margin + height * pitch + 1, margin + width * pitch + 1, 3), 255, np.uint8)

    for col, required in enumerate(map.col_requirements):
        _put_centered(img, str(int(required)), (margin + col * pitch + pitch // 2, margin // 2),
                      pitch / 60.0, BLACK, 1)
    for row, required in enumerate(map.row_requirements):
        _put_centered(img, str(int(required)), (margin // 2, margin + row * pitch + pitch // 2),
                      pitch / 60.0, BLACK, 1)

    for row in range(height):
        for col in range(width):
            x, y = margin + col * pitch, margin + row * pitch
            tile = Tile(int(map.tiles[row, col]))
            cx, cy = x + pitch // 2, y + pitch // 2
            if tile == Tile.BLOCKED:
                cv2.rectangle(img, (x, y), (x + pitch, y + pitch), GRAY, -1)
            elif tile == Tile.TREE:
                cv2.circle(img, (cx, cy), max(2, int(pitch * 0.35)), TREE_COLOR, -1)
            elif tile == Tile.TENT:
                r = int(pitch * 0.35)
                pts = np.array([[cx, cy - r], [cx - r, cy + r], [cx + r, cy + r]], np.int32)
                cv2.fillPoly(img, [pts], TENT_COLOR)
            cv2.rectangle(img, (x, y), (x + pitch, y + pitch), BLACK, 1)
    return img


def save_overlay(img: np.ndarray, path: str) -> str:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    if not cv2.imwrite(path, img):
        raise OSError(f"Could not write overlay image to {path}")
    return path
