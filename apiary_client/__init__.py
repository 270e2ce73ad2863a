"""
Apiary client - Python binding for the Apiary documentation-hosting API.

Layers:
- core: Transport pipeline, errors and typed results
- sdk: High-level ApiaryClient with one method per endpoint
"""

from apiary_client.core.client import (
    ApiaryError,
    BodyReadError,
    DecodeError,
    EmptyResponseError,
    ErrorKind,
    PublishRejectedError,
    RequestConstructionError,
    TransportError,
    UnexpectedStatusError,
)
from apiary_client.sdk import ApiaryClient

__version__ = "0.1.0"
__all__ = [
    "ApiaryClient",
    "ApiaryError",
    "BodyReadError",
    "DecodeError",
    "EmptyResponseError",
    "ErrorKind",
    "PublishRejectedError",
    "RequestConstructionError",
    "TransportError",
    "UnexpectedStatusError",
]
