"""Result type decoding tests."""

import pytest

from apiary_client.core.client import DecodeError
from apiary_client.core.types import Api, ApiList, Blueprint, Me, PublishEnvelope, TeamSummary


def test_unknown_fields_ignored():
    api = Api.from_dict({"apiName": "x", "apiOwner": {"id": 1}})

    assert api == Api(name="x")


def test_null_counts_as_missing():
    assert Blueprint.from_dict({"error": None, "message": None, "code": None}) == Blueprint()


@pytest.mark.parametrize(
    "data",
    [
        {"apiIsPrivate": "yes"},
        {"apiName": ["x"]},
        {"apiIsPublic": 1},
    ],
)
def test_wrong_field_type(data):
    with pytest.raises(DecodeError):
        Api.from_dict(data)


def test_top_level_must_be_object():
    with pytest.raises(DecodeError):
        ApiList.from_dict([])

    with pytest.raises(DecodeError):
        Me.from_dict(None)


def test_nested_team_must_be_object():
    with pytest.raises(DecodeError):
        Me.from_dict({"teams": ["acme"]})


def test_me_to_dict():
    me = Me(id="u1", name="jdoe", url="u", teams=[TeamSummary(id="t1", name="acme", url="t")])

    assert Me.from_dict(me.to_dict()) == me


def test_publish_envelope_defaults():
    assert PublishEnvelope.from_dict({}) == PublishEnvelope(error=False, message="")
