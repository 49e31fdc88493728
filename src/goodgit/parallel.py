from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List


def run_parallel(funcs: Iterable[Callable[[], Any]], max_workers: int | None = None) -> List[Any]:
    """Run thunks on a thread pool; results come back in submission order."""
    n = max_workers or min(32, (os.cpu_count() or 4))
    with ThreadPoolExecutor(max_workers=n) as ex:
        futs = [ex.submit(f) for f in funcs]
        return [f.result() for f in futs]
