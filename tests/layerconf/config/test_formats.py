"""Tests for configuration fragment parsers."""
import pytest

from layerconf.config import formats
from layerconf.utils.exceptions import UnsupportedConfigTypeError


def test_supported_types():
    types = formats.supported_types()
    for name in ("json", "yaml", "yml", "toml", "ini", "dotenv", "env", "properties"):
        assert name in types
    assert list(types) == sorted(types)


def test_ensure_supported_normalizes_token():
    assert formats.ensure_supported(".YAML") == "yaml"
    with pytest.raises(UnsupportedConfigTypeError):
        formats.ensure_supported("xml")
    with pytest.raises(UnsupportedConfigTypeError):
        formats.ensure_supported("")


def test_yaml_and_json():
    assert formats.parse("yaml", b"db:\n  port: 5432\n") == {"db": {"port": 5432}}
    assert formats.parse("json", b'{"db": {"port": 5432}}') == {"db": {"port": 5432}}
    assert formats.parse("yaml", b"") == {}


def test_non_mapping_fragment_is_rejected():
    with pytest.raises(ValueError):
        formats.parse("yaml", b"- just\n- a list\n")


def test_toml():
    assert formats.parse("toml", b'[db]\nport = 5432\nhost = "h"\n') == {"db": {"port": 5432, "host": "h"}}


def test_ini_sections_become_keys():
    text = b"[DEFAULT]\nname = svc\n\n[db]\nport = 5432\n"

    assert formats.parse("ini", text) == {"name": "svc", "db": {"port": "5432"}}


def test_dotenv():
    assert formats.parse("dotenv", b"NAME=svc\nPORT=1\n") == {"NAME": "svc", "PORT": "1"}


def test_properties_nest_dotted_keys():
    text = b"# comment\ndb.port=5432\ndb.host: localhost\nname = svc\n"

    assert formats.parse("properties", text) == {
        "db": {"port": "5432", "host": "localhost"},
        "name": "svc",
    }


def test_utf8_bom_is_accepted():
    assert formats.parse("json", b"\xef\xbb\xbf{\"a\": 1}") == {"a": 1}


def test_properties_last_duplicate_wins():
    assert formats.parse("properties", b"db.port=5432\ndb.port=5433\n") == {"db": {"port": "5433"}}


def test_properties_continuation_lines():
    text = b"hosts=alpha,\\\n      beta,\\\n      gamma\nname=svc\n"

    assert formats.parse("properties", text) == {"hosts": "alpha,beta,gamma", "name": "svc"}


def test_properties_whitespace_separator():
    text = b"  db.host localhost\ndb.url jdbc:pg://h/db\nflag\n"

    assert formats.parse("properties", text) == {
        "db": {"host": "localhost", "url": "jdbc:pg://h/db"},
        "flag": "",
    }
