from __future__ import annotations

import json
import sys
from typing import Any, Dict, Iterable, Optional, TextIO


def write_rows(rows: Iterable[Dict[str, Any]], out: Optional[TextIO] = None) -> int:
    """Write each row as one JSON line and return how many were written."""
    out = sys.stdout if out is None else out
    n = 0
    for r in rows:
        out.write(json.dumps(r, ensure_ascii=False) + "\n")
        out.flush()
        n += 1
    return n
