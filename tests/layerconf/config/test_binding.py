"""Tests for binding merged data onto destinations."""
from typing import Optional

import pytest
from pydantic import BaseModel, ConfigDict, Field

from layerconf.config.binding import align_keys, bind, nested_model, schema_keys
from layerconf.utils.exceptions import UnmarshalError


class Cache(BaseModel):
    ttl: int = 60


class Settings(BaseModel):
    serviceName: str = "svc"
    retries: int = 3
    cache: Cache = Field(default_factory=Cache)
    backup: Optional[Cache] = None


def test_schema_keys_are_dotted_and_lower_case():
    assert schema_keys(Settings) == [
        "servicename",
        "retries",
        "cache.ttl",
        "backup.ttl",
    ]


def test_nested_model_unwraps_optional():
    assert nested_model(Cache) is Cache
    assert nested_model(Optional[Cache]) is Cache
    assert nested_model(int) is None


def test_align_keys_restores_field_case():
    assert align_keys({"servicename": "x", "cache": {"ttl": 1}, "other": 2}, Settings) == {
        "serviceName": "x",
        "cache": {"ttl": 1},
        "other": 2,
    }


def test_bind_writes_only_provided_fields():
    settings = Settings()

    bind(settings, {"retries": "5", "cache": {"ttl": "10"}})

    assert settings.retries == 5
    assert settings.cache.ttl == 10
    assert settings.model_fields_set == {"retries", "cache"}


def test_bind_keeps_previously_set_fields():
    settings = Settings(serviceName="caller")

    bind(settings, {"retries": 1})

    assert settings.serviceName == "caller"
    assert settings.retries == 1


def test_bind_rejects_bad_types():
    with pytest.raises(UnmarshalError):
        bind(Settings(), {"retries": "many"})


def test_bind_rejects_frozen_model():
    class Frozen(BaseModel):
        model_config = ConfigDict(frozen=True)
        value: int = 0

    with pytest.raises(UnmarshalError):
        bind(Frozen(), {"value": 1})


def test_bind_rejects_unsupported_destination():
    with pytest.raises(UnmarshalError):
        bind(object(), {"a": 1})


def test_bind_deep_merges_into_mapping():
    data = {"db": {"host": "h"}}

    bind(data, {"db": {"port": 1}})

    assert data == {"db": {"host": "h", "port": 1}}
