"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

from knightfall.core.notation import position_from_fen
from knightfall.core.position import Position

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

CHECKMATE_FEN = "7k/5KQ1/8/8/8/8/8/8 b - - 0 1"
STALEMATE_FEN = "k7/2Q5/2K5/8/8/8/8/8 b - - 0 1"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton Qt core application for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def checkmated() -> Position:
    """Black Kh8 mated by Qg7, the queen protected by Kf7."""
    return position_from_fen(CHECKMATE_FEN)


@pytest.fixture
def stalemated() -> Position:
    """Black Ka8 boxed in by Qc7 and Kc6, not in check."""
    return position_from_fen(STALEMATE_FEN)
