# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Strip reasoning blocks from raw model output.
"""

import re

REASONING_OPEN = "<think>"
REASONING_CLOSE = "</think>"

# Non-greedy and across newlines: each opening marker ends at the nearest close
_REASONING_BLOCK = re.compile(re.escape(REASONING_OPEN) + r".*?" + re.escape(REASONING_CLOSE), re.DOTALL)


def sanitize(raw: str) -> str:
    """Remove every <think>...</think> span, then trim the ends.

    An opening marker without a close is left in place.
    """
    if not raw or not raw.strip():
        return ""
    return _REASONING_BLOCK.sub("", raw).strip()
