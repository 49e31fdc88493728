from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NewType, Optional, Union
from urllib.parse import SplitResult, urlsplit

Username = NewType("Username", str)
RepoName = NewType("RepoName", str)


class Platform(Enum):
    GITHUB = ("github", "github.com", "https://github.com/")
    GITLAB = ("gitlab", "gitlab.com", "https://gitlab.com/")

    def __init__(self, key: str, domain: str, base_url: str) -> None:
        self.key = key
        self.domain = domain
        self.base_url = base_url

    @classmethod
    def from_domain(cls, domain: str) -> Optional["Platform"]:
        for p in cls:
            if p.domain == domain:
                return p
        return None

    @classmethod
    def from_key(cls, key: str) -> "Platform":
        for p in cls:
            if p.key == key:
                return p
        raise ValueError(f"Unknown platform: {key!r}")


@dataclass(frozen=True)
class PlatformUser:
    platform: Platform
    username: Username

    def __str__(self) -> str:
        return self.platform.base_url + self.username


# The platform field tags which hosting service the user lives on.
User = PlatformUser


@dataclass(frozen=True)
class UserRoute:
    user: User

    @property
    def platform(self) -> Platform:
        return self.user.platform

    @property
    def owner(self) -> User:
        return self.user

    def __str__(self) -> str:
        return str(self.user)

    def as_url(self) -> SplitResult:
        return urlsplit(str(self))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "user",
            "platform": self.platform.key,
            "username": self.user.username,
        }


@dataclass(frozen=True)
class RepoRoute:
    user: PlatformUser
    repo_name: RepoName

    @property
    def platform(self) -> Platform:
        return self.user.platform

    @property
    def owner(self) -> User:
        return self.user

    def __str__(self) -> str:
        return f"{self.user}/{self.repo_name}"

    def as_url(self) -> SplitResult:
        return urlsplit(str(self))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "repo",
            "platform": self.platform.key,
            "username": self.user.username,
            "repo_name": self.repo_name,
        }


Route = Union[UserRoute, RepoRoute]


def _field(data: Dict[str, Any], key: str) -> str:
    v = data.get(key)
    if not isinstance(v, str) or not v:
        raise ValueError(f"Missing or empty {key!r} in route data")
    return v


def route_from_dict(data: Dict[str, Any]) -> Route:
    """
    Rebuild a route from the mapping produced by ``to_dict()``:
        {"kind": "user", "platform": "github", "username": "ctsrc"}
        {"kind": "repo", "platform": "gitlab", "username": "qemu-project", "repo_name": "qemu"}
    """
    kind = data.get("kind")
    user = PlatformUser(
        platform=Platform.from_key(_field(data, "platform")),
        username=Username(_field(data, "username")),
    )
    if kind == "user":
        return UserRoute(user)
    if kind == "repo":
        return RepoRoute(user, RepoName(_field(data, "repo_name")))
    raise ValueError(f"Unknown route kind: {kind!r}")


class RouteError(ValueError):
    message = "Could not route the provided URL"

    def __init__(self, url: str = "") -> None:
        super().__init__(self.message)
        self.url = url

    @property
    def kind(self) -> str:
        return type(self).__name__


class NoDomain(RouteError):
    message = "No domain found in the provided URL"


class NoRoute(RouteError):
    message = "No route for the provided URL"


class NoPath(RouteError):
    message = "No path in the provided URL"


class NoUsername(RouteError):
    message = "No username in the provided URL"
