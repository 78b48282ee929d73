from __future__ import annotations

import shutil
from typing import Literal

# --------------------------------------------------
# Layout constants
# --------------------------------------------------

DEFAULT_WIDTH = 80
LOG_GUTTER_WIDTH = 10  # "[ INFO ]  " etc.

Width = int | Literal["auto"]


def _resolve_width(width: Width) -> int:
    if width == "auto":
        try:
            cols = shutil.get_terminal_size().columns
        except Exception:
            cols = DEFAULT_WIDTH
        return max(DEFAULT_WIDTH, cols - LOG_GUTTER_WIDTH)
    return max(DEFAULT_WIDTH, int(width))


# --------------------------------------------------
# Banner
# --------------------------------------------------

BANNER = """
       _   _                         _
 _   _| |_(_)_ __ ___  _ __   ___  _ __| |_
| | | | __| | '_ ` _ \\| '_ \\ / _ \\| '__| __|
| |_| | |_| | | | | | | |_) | (_) | |  | |_
 \\__, |\\__|_|_| |_| |_| .__/ \\___/|_|   \\__|
 |___/                |_|
"""


# --------------------------------------------------
# Headers / sections
# --------------------------------------------------


def HEADER(
    title: str,
    *,
    width: Width = DEFAULT_WIDTH,
    pad: int = 8,
    motif: str = "•♪•",
) -> str:
    title = title.strip()
    w = _resolve_width(width)
    inner = w - 2

    min_title = len(title) + pad * 2
    inner = max(inner, min_title)

    filler = inner - len(motif)
    left = filler // 2
    right = filler - left

    top = f"╔{'═' * left}{motif}{'═' * right}╗"
    mid = f"│{title.center(inner)}│"
    bot = f"╚{'═' * left}{motif}{'═' * right}╝"

    return f"\n{top}\n{mid}\n{bot}\n\n"


# --------------------------------------------------
# Symbols
# --------------------------------------------------


class SYMBOLS:
    OK = "✔"
    FAIL = "✖"
    WARN = "⚠"
    SKIPPED = "⤼"
    ADD = "➕"
    PLAYLIST = "📻"
