"""Repository layer: SQL builders over SQLiteHandle.

Keep functions thin and focused, so services avoid SQL strings.
"""
from __future__ import annotations
