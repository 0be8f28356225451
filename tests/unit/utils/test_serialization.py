"""
Tests for request body serialization.
"""

import dataclasses
import json
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from constellix_client.core.exceptions import SerializationError
from constellix_client.utils.serialization import encode_payload


@dataclasses.dataclass
class Soa:
    primary_nameserver: str
    ttl: int = 86400


@dataclasses.dataclass
class Domain:
    name: str
    soa: Optional[Soa] = None


class Record(BaseModel):
    name: str
    record_type: str = Field(alias="type")
    ttl: int = 3600


class TestEncodePayload:
    """Tests for encode_payload."""

    def test_dict(self):
        assert encode_payload({"name": "example.com"}) == b'{"name": "example.com"}'

    def test_list(self):
        assert json.loads(encode_payload([1, 2, 3])) == [1, 2, 3]

    def test_unicode_is_utf8(self):
        body = encode_payload({"note": "домен"})
        assert json.loads(body.decode("utf-8")) == {"note": "домен"}

    def test_nested_dataclass(self):
        body = encode_payload(Domain(name="example.com", soa=Soa("ns1.example.com")))
        assert json.loads(body) == {
            "name": "example.com",
            "soa": {"primary_nameserver": "ns1.example.com", "ttl": 86400},
        }

    def test_pydantic_model_uses_aliases(self):
        body = encode_payload(Record(name="www", type="A"))
        assert json.loads(body) == {"name": "www", "type": "A", "ttl": 3600}

    def test_pydantic_model_inside_dict(self):
        body = encode_payload({"records": [Record(name="www", type="A")]})
        assert json.loads(body)["records"][0]["type"] == "A"

    def test_set_becomes_list(self):
        assert json.loads(encode_payload({"ids": {1}})) == {"ids": [1]}

    def test_none_is_null(self):
        assert encode_payload(None) == b"null"


class TestEncodeErrors:

    def test_unknown_type(self):
        with pytest.raises(SerializationError) as exc_info:
            encode_payload({"handle": object()})
        assert exc_info.value.payload_type == "dict"
        assert isinstance(exc_info.value.__cause__, TypeError)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_floats(self, value):
        with pytest.raises(SerializationError):
            encode_payload({"ttl": value})

    def test_circular_reference(self):
        data = {}
        data["self"] = data
        with pytest.raises(SerializationError):
            encode_payload(data)
