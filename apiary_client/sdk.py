"""
Apiary SDK - High-level client with typed results.

Each operation is one request/response round trip built on the core APIClient:
pick the auth scheme, format the path, send, check the status, decode.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from apiary_client.core.client import (
    APIClient,
    AuthScheme,
    Opener,
    PublishRejectedError,
    Response,
    check_status,
)
from apiary_client.core.types import ApiList, Blueprint, Me, PublishEnvelope

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Endpoints, relative to the base URL
ACTION_ME = "me"
ACTION_GET_APIS = "me/apis"
ACTION_GET_TEAM_APIS = "me/teams/{team}/apis"
ACTION_FETCH_BLUEPRINT = "blueprint/get/{name}"
ACTION_PUBLISH_BLUEPRINT = "blueprint/publish/{name}"


def _decode(response: Response, parser: Callable[[object], T]) -> T:
    return parser(response.json())


class ApiaryClient:
    """
    High-level Apiary API client.

    Example:
        client = ApiaryClient(token="...")

        me = client.me()
        for api in client.get_team_apis(me.teams[0].name):
            print(api.subdomain)

        blueprint = client.fetch_blueprint("myapi")
        client.publish_blueprint("myapi", blueprint.code)

    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        opener: Opener | None = None,
    ):
        """
        Initialize the Apiary client.

        Args:
            token: Apiary API token (or APIARY_TOKEN env var)
            base_url: API base URL (or APIARY_BASE_URL env var)
            timeout: Request timeout in seconds; None leaves the transport default
            opener: Transport handle, defaults to urllib's standard opener

        """
        self._client = APIClient(token=token, base_url=base_url, timeout=timeout, opener=opener)

    @classmethod
    def from_env(cls, opener: Opener | None = None) -> "ApiaryClient":
        """Create a client configured entirely from APIARY_* environment variables."""
        return cls(opener=opener)

    @property
    def token(self) -> str:
        """Get the API token."""
        return self._client.token

    @property
    def base_url(self) -> str:
        """Get the API base URL."""
        return self._client.base_url

    # =========================================================================
    # User information
    # =========================================================================

    def me(self) -> Me:
        """
        Retrieve information about the token's user.

        Reference: http://docs.apiary.apiary.io/#reference/user-information/me/get-me

        Returns:
            Me with user id, name, APIs url and team summaries

        """
        response = self._client.get(ACTION_ME, AuthScheme.MODERN)
        check_status(response)
        return _decode(response, Me.from_dict)

    # =========================================================================
    # API listings
    # =========================================================================

    def get_apis(self) -> ApiList:
        """
        List the user's APIs.

        Reference: http://docs.apiary.apiary.io/#reference/api-list/user-api-list/get-me
        """
        response = self._client.get(ACTION_GET_APIS, AuthScheme.MODERN)
        check_status(response)
        return _decode(response, ApiList.from_dict)

    def get_team_apis(self, team: str) -> ApiList:
        """
        List the APIs of a team.

        The team name is put into the path as given.

        Reference: http://docs.apiary.apiary.io/#reference/api-list/team-api-list/get-me
        """
        response = self._client.get(ACTION_GET_TEAM_APIS.format(team=team), AuthScheme.MODERN)
        check_status(response)
        return _decode(response, ApiList.from_dict)

    # =========================================================================
    # Blueprints
    # =========================================================================

    def fetch_blueprint(self, name: str) -> Blueprint:
        """
        Fetch the blueprint source of an API.

        Args:
            name: API subdomain

        Returns:
            Blueprint whose code is the source text exactly as stored

        """
        response = self._client.get(ACTION_FETCH_BLUEPRINT.format(name=name), AuthScheme.LEGACY)
        check_status(response)
        return _decode(response, Blueprint.from_dict)

    def publish_blueprint(self, name: str, content: str | bytes) -> bool:
        """
        Publish blueprint source to an API.

        A 201 is success. Any other status is judged by the error envelope in
        the body: the service answers a re-publish of identical content with
        200 and ``{"error": false}``, which also counts as published.

        Reference: http://docs.apiary.apiary.io/#reference/blueprint/publish-blueprint/get-me

        Args:
            name: API subdomain
            content: Blueprint source (str, or UTF-8 bytes; invalid bytes become U+FFFD)

        Returns:
            True once published

        Raises:
            PublishRejectedError: The service reported an error
            DecodeError: A non-201 body could not be decoded

        """
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")

        response = self._client.post(
            ACTION_PUBLISH_BLUEPRINT.format(name=name),
            {"code": content},
            AuthScheme.LEGACY,
        )
        if response.status == 201:
            return True

        envelope = _decode(response, PublishEnvelope.from_dict)
        if envelope.error:
            logger.warning("Publishing %s rejected: %s", name, envelope.message)
            raise PublishRejectedError(
                f"Creation failed: {envelope.message}",
                remote_message=envelope.message,
                details={"status": response.status},
            )

        logger.debug("Publishing %s answered %s without error", name, response.status_line)
        return True
