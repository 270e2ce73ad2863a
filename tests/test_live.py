"""
Live smoke tests against the real Apiary API.

Run with: python -m pytest tests/test_live.py -v -s
Requires: APIARY_TOKEN (and APIARY_REPO / APIARY_TEAM for the repository and team tests)
"""

import os

import pytest

from apiary_client import ApiaryClient, ApiaryError, UnexpectedStatusError

TOKEN = os.environ.get("APIARY_TOKEN")
REPOSITORY = os.environ.get("APIARY_REPO")
TEAM = os.environ.get("APIARY_TEAM")

VALID_BLUEPRINT = """FORMAT: 1A
HOST: http://api.example.com/

# Example API\\n\\nIntroduction.
# And update
"""

pytestmark = pytest.mark.skipif(not TOKEN, reason="APIARY_TOKEN not set")

needs_repo = pytest.mark.skipif(not REPOSITORY, reason="APIARY_REPO not set")


@pytest.fixture
def client() -> ApiaryClient:
    return ApiaryClient(token=TOKEN, timeout=30)


@pytest.fixture
def anonymous() -> ApiaryClient:
    return ApiaryClient(token="", timeout=30)


def test_me(client):
    me = client.me()

    assert me.id
    assert me.name
    assert me.url


def test_me_empty_token(anonymous):
    with pytest.raises(UnexpectedStatusError):
        anonymous.me()


def test_get_apis(client):
    apis = client.get_apis()

    assert len(apis) > 0
    for api in apis:
        assert api.name
        assert api.documentation_url
        assert api.subdomain


def test_get_apis_empty_token(anonymous):
    with pytest.raises(ApiaryError):
        anonymous.get_apis()


def test_get_invalid_team(client):
    with pytest.raises(ApiaryError):
        client.get_team_apis("some_invalid_team_name")


@pytest.mark.skipif(not TEAM, reason="APIARY_TEAM not set")
def test_get_team_apis(client):
    apis = client.get_team_apis(TEAM)

    assert len(apis) > 0
    for api in apis:
        assert api.name
        assert api.subdomain


@needs_repo
def test_publish_and_fetch_blueprint(client):
    assert client.publish_blueprint(REPOSITORY, VALID_BLUEPRINT) is True
    # Same content again: the service answers without a 201
    assert client.publish_blueprint(REPOSITORY, VALID_BLUEPRINT) is True

    blueprint = client.fetch_blueprint(REPOSITORY)

    assert not blueprint.error
    assert blueprint.message == ""
    assert blueprint.code == VALID_BLUEPRINT


@needs_repo
def test_publish_empty_token(anonymous):
    with pytest.raises(ApiaryError):
        anonymous.publish_blueprint(REPOSITORY, VALID_BLUEPRINT)


def test_publish_to_repo_without_rights(client):
    with pytest.raises(ApiaryError):
        client.publish_blueprint("testingapiaryclitestingapiarycli", VALID_BLUEPRINT)
