from __future__ import annotations

from .prefix_lines import PrefixLines
from .surround_selection import SurroundSelection

__all__ = [
    "SurroundSelection",
    "PrefixLines",
]
