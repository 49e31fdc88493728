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
    RouteError,
    User,
    UserRoute,
    Username,
    route_from_dict,
)
from .router import route

__all__ = [
    "NoDomain",
    "NoPath",
    "NoRoute",
    "NoUsername",
    "Platform",
    "PlatformUser",
    "RepoName",
    "RepoRoute",
    "Route",
    "RouteError",
    "User",
    "UserRoute",
    "Username",
    "route",
    "route_from_dict",
]
