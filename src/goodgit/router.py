from __future__ import annotations

import ipaddress
from typing import Union
from urllib.parse import ParseResult, SplitResult, quote, urlsplit

from .models import (
    NoDomain,
    NoPath,
    NoRoute,
    NoUsername,
    Platform,
    PlatformUser,
    RepoName,
    RepoRoute,
    Route,
    UserRoute,
    Username,
)

# Schemes whose empty path is the root path "/"
_ROOTED_SCHEMES = {"http", "https"}
_GIT_SUFFIX = ".git"
# Path segments are stored percent-encoded, existing %XX escapes kept as they are
_SEGMENT_SAFE = "!$%&'()*+,;=:@[]|\\"


def _encode_segment(segment: str) -> str:
    return quote(segment, safe=_SEGMENT_SAFE)


def _is_ip(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def route(url: Union[str, SplitResult, ParseResult]) -> Route:
    """
    Classify a URL as a user or repository on a known hosting platform.

    Only /<username> and /<username>/<repo> matter; deeper path segments,
    the query and the fragment are discarded:
        https://github.com/ctsrc                         -> UserRoute
        https://github.com/ctsrc/goodgit.git             -> RepoRoute(ctsrc, goodgit)
        https://gitlab.com/qemu-project/qemu/-/network   -> RepoRoute(qemu-project, qemu)

    Raises a RouteError subclass (NoDomain, NoRoute, NoPath, NoUsername).
    """
    raw = url if isinstance(url, str) else url.geturl()
    try:
        # ParseResult keeps ";params" apart from the path; reparse so both forms agree
        p = urlsplit(raw.strip())
    except ValueError as e:
        # e.g. an unbalanced IPv6 bracket in the netloc
        raise NoDomain(raw) from e

    # hostname is already lowercased by urllib.parse
    domain = p.hostname
    if not domain or _is_ip(domain):
        raise NoDomain(raw)

    platform = Platform.from_domain(domain)
    if platform is None:
        raise NoRoute(raw)

    path = p.path
    if not path and p.scheme.lower() in _ROOTED_SCHEMES:
        path = "/"
    if not path:
        raise NoPath(raw)

    # leading "" + username + repo name
    parts = [_encode_segment(s) for s in path.split("/", 3)[:3]]
    username = parts[1] if len(parts) > 1 else ""
    if not username:
        raise NoUsername(raw)

    user = PlatformUser(platform, Username(username))
    repo_name = parts[2] if len(parts) > 2 else ""
    if not repo_name:
        return UserRoute(user)

    # Stripped once: "b.git.git" -> "b.git"
    if repo_name.endswith(_GIT_SUFFIX) and repo_name != _GIT_SUFFIX:
        repo_name = repo_name[: -len(_GIT_SUFFIX)]
    return RepoRoute(user, RepoName(repo_name))
