"""
layerconf.config.formats
========================

Parsers for the configuration fragment formats, keyed by type token.

Every parser takes the decoded text of one fragment and returns a nested
``dict``. Parsers register themselves under the ``config_type`` category of
the component registry; :func:`parse` looks them up by token.
"""

from __future__ import annotations

import configparser
import io
import json
import re
import tomllib
from typing import Any, Dict, Iterator, Tuple

import yaml
from dotenv import dotenv_values

from layerconf.config.constants import CONFIG_TYPE_CATEGORY
from layerconf.utils.component_registry import available, get, register
from layerconf.utils.exceptions import UnsupportedConfigTypeError
from layerconf.utils.mappings import nest_dotted


def _require_mapping(data: Any, config_type: str) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_type} fragment must contain a mapping, got {type(data).__name__}")
    return data


@register(CONFIG_TYPE_CATEGORY, "json")
def parse_json(text: str) -> Dict[str, Any]:
    return _require_mapping(json.loads(text), "json")


@register(CONFIG_TYPE_CATEGORY, "yaml", "yml")
def parse_yaml(text: str) -> Dict[str, Any]:
    return _require_mapping(yaml.safe_load(text), "yaml")


@register(CONFIG_TYPE_CATEGORY, "toml")
def parse_toml(text: str) -> Dict[str, Any]:
    return tomllib.loads(text)


@register(CONFIG_TYPE_CATEGORY, "ini")
def parse_ini(text: str) -> Dict[str, Any]:
    """Sections become top-level keys; ``[DEFAULT]`` values land at the root."""
    parser = configparser.ConfigParser(interpolation=None)
    parser.read_string(text)
    defaults = parser.defaults()
    data: Dict[str, Any] = nest_dotted(dict(defaults))
    for section in parser.sections():
        own = {k: v for k, v in parser.items(section, raw=True) if k not in defaults}
        data[section] = nest_dotted(own)
    return data


@register(CONFIG_TYPE_CATEGORY, "dotenv", "env")
def parse_dotenv(text: str) -> Dict[str, Any]:
    values = dotenv_values(stream=io.StringIO(text))
    return {key: value for key, value in values.items() if value is not None}


_WHITESPACE_SEPARATOR = re.compile(r"^([^\s=:]+)\s+([^\s=:].*)$")


def _property_lines(text: str) -> Iterator[str]:
    """Yield logical ``key=value`` lines of a properties document.

    Leading whitespace is dropped, a line ending in an odd number of
    backslashes continues on the next one, and ``key value`` pairs are
    rewritten with an explicit ``=``.
    """
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip()
        if not pending and (not line or line.startswith(("#", "!"))):
            yield line
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2:
            pending += line[:-1]
            continue
        line, pending = pending + line, ""
        match = _WHITESPACE_SEPARATOR.match(line)
        yield f"{match.group(1)}={match.group(2)}" if match else line
    if pending:
        yield pending


@register(CONFIG_TYPE_CATEGORY, "properties", "props", "prop")
def parse_properties(text: str) -> Dict[str, Any]:
    """Java-style properties; dotted keys nest and the last duplicate wins."""
    parser = configparser.ConfigParser(
        interpolation=None,
        delimiters=("=", ":"),
        comment_prefixes=("#", "!"),
        strict=False,
        allow_no_value=True,
    )
    parser.optionxform = str
    parser.read_string("[__root__]\n" + "\n".join(_property_lines(text)))
    values = {key: value or "" for key, value in parser.items("__root__", raw=True)}
    return nest_dotted(values)


def supported_types() -> Tuple[str, ...]:
    """Return the sorted tuple of accepted configuration type tokens."""
    return available(CONFIG_TYPE_CATEGORY)


def ensure_supported(config_type: str) -> str:
    """Return the normalized token or raise :class:`UnsupportedConfigTypeError`."""
    token = (config_type or "").lower().lstrip(".")
    if token not in supported_types():
        raise UnsupportedConfigTypeError(
            f"Unsupported config type {config_type!r}; expected one of {', '.join(supported_types())}"
        )
    return token


def parse(config_type: str, data: bytes) -> Dict[str, Any]:
    """Decode *data* and parse it with the parser registered for *config_type*."""
    parser = get(CONFIG_TYPE_CATEGORY, ensure_supported(config_type))
    return parser(data.decode("utf-8-sig"))
