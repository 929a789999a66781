"""
layerconf.config.binding
========================

Bind merged configuration data onto a caller-owned destination.

Two destination shapes are supported:

* a pydantic ``BaseModel`` instance – values are validated against the model
  (type coercion, nested models) and written back onto the *same* instance.
  Key matching is case-insensitive. Only fields that the data actually
  provides are written, so untouched fields stay "unset" for defaulting.
* a mutable mapping – the data is deep-merged into it as-is.
"""

from __future__ import annotations

import types
from collections.abc import MutableMapping
from typing import Any, Dict, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from layerconf.utils.exceptions import UnmarshalError
from layerconf.utils.mappings import deep_merge, lower_keys


def nested_model(annotation: Any) -> Optional[Type[BaseModel]]:
    """Return the model class behind *annotation* (``Model`` or ``Optional[Model]``)."""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    if get_origin(annotation) in (Union, types.UnionType):
        models = [
            arg for arg in get_args(annotation)
            if isinstance(arg, type) and issubclass(arg, BaseModel)
        ]
        if len(models) == 1:
            return models[0]
    return None


def _field_key(name: str, field) -> str:
    return field.alias or name


def schema_keys(model_cls: Type[BaseModel], prefix: str = "") -> List[str]:
    """Dotted, lower-cased paths of every leaf field declared by *model_cls*."""
    keys: List[str] = []
    for name, field in model_cls.model_fields.items():
        path = f"{prefix}{_field_key(name, field).lower()}"
        child = nested_model(field.annotation)
        if child is not None:
            keys.extend(schema_keys(child, path + "."))
        else:
            keys.append(path)
    return keys


def align_keys(data: Dict[str, Any], model_cls: Type[BaseModel]) -> Dict[str, Any]:
    """Rename lower-cased keys in *data* to the field keys of *model_cls*."""
    lookup = {
        _field_key(name, field).lower(): (_field_key(name, field), field)
        for name, field in model_cls.model_fields.items()
    }
    aligned: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in lookup:
            aligned[key] = value
            continue
        field_key, field = lookup[key]
        child = nested_model(field.annotation)
        if child is not None and isinstance(value, dict):
            value = align_keys(value, child)
        aligned[field_key] = value
    return aligned


def _bind_model(destination: BaseModel, data: Dict[str, Any]) -> None:
    model_cls = type(destination)
    current = lower_keys(destination.model_dump(exclude_unset=True, by_alias=True))
    payload = align_keys(deep_merge(current, data), model_cls)
    try:
        parsed = model_cls.model_validate(payload)
    except ValidationError as exc:
        raise UnmarshalError(
            f"Cannot bind configuration to {model_cls.__name__}: {exc}"
        ) from exc

    for name in parsed.model_fields_set:
        try:
            setattr(destination, name, getattr(parsed, name))
        except (ValidationError, AttributeError, TypeError) as exc:
            raise UnmarshalError(
                f"Cannot assign {model_cls.__name__}.{name}: {exc}"
            ) from exc


def bind(destination: Any, data: Dict[str, Any]) -> None:
    """
    Write *data* onto *destination*.

    Raises
    ------
    UnmarshalError
        If the data does not fit the destination's shape, or the destination
        is of an unsupported kind.
    """
    if isinstance(destination, BaseModel):
        _bind_model(destination, data)
    elif isinstance(destination, MutableMapping):
        merged = deep_merge(dict(destination), data)
        destination.clear()
        destination.update(merged)
    else:
        raise UnmarshalError(
            f"Unsupported destination type {type(destination).__name__}; "
            "expected a pydantic model or a mutable mapping"
        )
