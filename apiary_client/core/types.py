"""
Core types for Apiary API responses.

These dataclasses provide type safety and IDE support for API responses.
Unknown fields are ignored, missing (or null) fields take their defaults and
a field of the wrong JSON type raises DecodeError.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from apiary_client.core.client import DecodeError

# =============================================================================
# Field helpers
# =============================================================================


def _object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected JSON object for {what}, got {type(data).__name__}")
    return data


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Field {key!r} must be a string, got {type(value).__name__}")
    return value


def _bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"Field {key!r} must be a boolean, got {type(value).__name__}")
    return value


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"Field {key!r} must be a list, got {type(value).__name__}")
    return value


# =============================================================================
# User Types
# =============================================================================


@dataclass
class TeamSummary:
    """A team the current user belongs to."""

    id: str = ""
    name: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "TeamSummary":
        """Create from API response dict."""
        data = _object(data, "team")
        return cls(
            id=_str(data, "teamId"),
            name=_str(data, "teamName"),
            url=_str(data, "teamApisUrl"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"teamId": self.id, "teamName": self.name, "teamApisUrl": self.url}


@dataclass
class Me:
    """The user owning the API token."""

    id: str = ""
    name: str = ""
    url: str = ""
    teams: list[TeamSummary] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Me":
        """Create from API response dict."""
        data = _object(data, "user")
        return cls(
            id=_str(data, "userId"),
            name=_str(data, "userName"),
            url=_str(data, "userApisUrl"),
            teams=[TeamSummary.from_dict(t) for t in _list(data, "teams")],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.id,
            "userName": self.name,
            "userApisUrl": self.url,
            "teams": [t.to_dict() for t in self.teams],
        }


# =============================================================================
# API Types
# =============================================================================


@dataclass
class Api:
    """An API project hosted on Apiary."""

    name: str = ""
    documentation_url: str = ""
    subdomain: str = ""
    private: bool = False
    public: bool = False
    team: bool = False
    personal: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Api":
        """Create from API response dict."""
        data = _object(data, "api")
        return cls(
            name=_str(data, "apiName"),
            documentation_url=_str(data, "apiDocumentationUrl"),
            subdomain=_str(data, "apiSubdomain"),
            private=_bool(data, "apiIsPrivate"),
            public=_bool(data, "apiIsPublic"),
            team=_bool(data, "apiIsTeam"),
            personal=_bool(data, "apiIsPersonal"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiName": self.name,
            "apiDocumentationUrl": self.documentation_url,
            "apiSubdomain": self.subdomain,
            "apiIsPrivate": self.private,
            "apiIsPublic": self.public,
            "apiIsTeam": self.team,
            "apiIsPersonal": self.personal,
        }


@dataclass
class ApiList:
    """A list of APIs, as returned by the user and team listings."""

    apis: list[Api] = field(default_factory=list)

    def __iter__(self) -> Iterator[Api]:
        return iter(self.apis)

    def __len__(self) -> int:
        return len(self.apis)

    @classmethod
    def from_dict(cls, data: Any) -> "ApiList":
        """Create from API response dict."""
        data = _object(data, "api list")
        return cls(apis=[Api.from_dict(a) for a in _list(data, "apis")])

    def to_dict(self) -> dict[str, Any]:
        return {"apis": [a.to_dict() for a in self.apis]}


# =============================================================================
# Blueprint Types
# =============================================================================


@dataclass
class Blueprint:
    """A fetched blueprint. ``code`` holds the API description source verbatim."""

    error: bool = False
    message: str = ""
    code: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Blueprint":
        """Create from API response dict."""
        data = _object(data, "blueprint")
        return cls(
            error=_bool(data, "error"),
            message=_str(data, "message"),
            code=_str(data, "code"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message, "code": self.code}


@dataclass
class PublishEnvelope:
    """Error envelope returned by a publish that did not answer 201."""

    error: bool = False
    message: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "PublishEnvelope":
        """Create from API response dict."""
        data = _object(data, "publish response")
        return cls(error=_bool(data, "error"), message=_str(data, "message"))
