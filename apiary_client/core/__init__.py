"""
Core layer - Transport pipeline and typed results.

This layer provides:
- Low-level HTTP client with auth headers and error handling
- Typed dataclasses for the API responses
"""

from apiary_client.core.client import (
    APIClient,
    ApiaryError,
    AuthScheme,
    BodyReadError,
    DecodeError,
    EmptyResponseError,
    ErrorKind,
    PublishRejectedError,
    RequestConstructionError,
    Response,
    TransportError,
    UnexpectedStatusError,
    auth_headers,
    bearer_token,
    check_status,
    legacy_token,
    read_body,
)
from apiary_client.core.types import Api, ApiList, Blueprint, Me, PublishEnvelope, TeamSummary

__all__ = [
    "APIClient",
    "Api",
    "ApiList",
    "ApiaryError",
    "AuthScheme",
    "Blueprint",
    "BodyReadError",
    "DecodeError",
    "EmptyResponseError",
    "ErrorKind",
    "Me",
    "PublishEnvelope",
    "PublishRejectedError",
    "RequestConstructionError",
    "Response",
    "TeamSummary",
    "TransportError",
    "UnexpectedStatusError",
    "auth_headers",
    "bearer_token",
    "check_status",
    "legacy_token",
    "read_body",
]
