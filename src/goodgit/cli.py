"""
goodgit.cli

Route user/repository URLs and print one NDJSON record per URL:
    {"url": ..., "canonical": ..., "route": {...}, "owner": ..., "steps": [...]}
or, when the URL cannot be routed:
    {"url": ..., "error": "NoRoute", "message": ...}

URLs are taken from the arguments, else from the URL environment variable,
else from non-blank stdin lines.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Callable, Dict, Iterable, List

from .io_ndjson import write_rows
from .logging_cfg import close_logging, setup_logging
from .models import RepoRoute, Route, RouteError
from .parallel import run_parallel
from .router import route

log = logging.getLogger(__name__)

USAGE = "Usage: goodgit URL [URL ...]  (or set URL, or pipe URLs on stdin)"


def follow_up_steps(r: Route) -> List[str]:
    # Repos are looked up and cloned first, then their owner is looked up
    if isinstance(r, RepoRoute):
        return ["repo_info", "clone", "user_info"]
    return ["user_info"]


def describe(url: str) -> Dict[str, Any]:
    try:
        r = route(url)
    except RouteError as e:
        log.warning("No route for %s: %s (%s)", url, e.kind, e)
        return {"url": url, "error": e.kind, "message": str(e)}

    data = r.to_dict()
    log.info("Route found for URL %s: %s", url, json.dumps(data))
    steps = follow_up_steps(r)
    if isinstance(r, RepoRoute):
        log.info("Repo %s on %s: planned %s", r, r.platform.key, ", ".join(steps[:-1]))
    else:
        log.info("URL is for a user, no initial repo to clone: %s", r)
    log.info("User info retrieval planned for %s", r.owner)

    return {
        "url": url,
        "canonical": str(r),
        "route": data,
        "owner": str(r.owner),
        "steps": steps,
    }


def route_many(urls: List[str]) -> List[Dict[str, Any]]:
    if not urls:
        return []

    def _make_thunk(u: str) -> Callable[[], Dict[str, Any]]:
        def thunk() -> Dict[str, Any]:
            return describe(u)

        return thunk

    workers = min(8, max(2, len(urls)))
    return run_parallel([_make_thunk(u) for u in urls], max_workers=workers)


def _iter_stdin() -> Iterable[str]:
    # Never block on an interactive terminal
    if sys.stdin is None or sys.stdin.isatty():
        return []
    return sys.stdin


def _collect_urls(args: List[str]) -> List[str]:
    if args:
        return args
    env_url = os.getenv("URL", "").strip()
    if env_url:
        return [env_url]
    return [ln.strip() for ln in _iter_stdin() if ln.strip()]


def main(argv=None) -> int:
    setup_logging()
    try:
        argv = sys.argv if argv is None else argv
        urls = _collect_urls(list(argv[1:]))
        if not urls:
            print(USAGE, file=sys.stderr)
            return 1

        rows = route_many(urls)
        write_rows(rows)
        failed = sum(1 for r in rows if "error" in r)
        if failed:
            log.warning("%d of %d URLs could not be routed", failed, len(rows))
            return 1
        return 0
    finally:
        close_logging()


if __name__ == "__main__":
    raise SystemExit(main())
