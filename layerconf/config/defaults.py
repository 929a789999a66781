"""Fill destination fields that no configuration layer provided."""
from __future__ import annotations

import copy
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from layerconf.utils.exceptions import UnmarshalError

logger = logging.getLogger(__name__)


def apply_defaults(destination: Any) -> None:
    """
    Give every unset field of *destination* its declared default.

    A field counts as set once any layer (or the caller) assigned it, even to
    a zero value; such fields are never touched. Nested models are visited
    recursively. Plain mappings declare no defaults and are left alone.
    """
    if isinstance(destination, BaseModel):
        _fill(destination)


def _fill(model: BaseModel) -> None:
    model_cls = type(model)
    for name, field in model_cls.model_fields.items():
        if name not in model.model_fields_set and not field.is_required():
            value = copy.deepcopy(field.get_default(call_default_factory=True))
            try:
                setattr(model, name, value)
            except (ValidationError, AttributeError, TypeError) as exc:
                raise UnmarshalError(f"Cannot default {model_cls.__name__}.{name}: {exc}") from exc
            logger.debug("Defaulted %s.%s", model_cls.__name__, name)
        value = getattr(model, name, None)
        if isinstance(value, BaseModel):
            _fill(value)
