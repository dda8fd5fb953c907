"""
Model Utilities

Copying and merging helpers for the values produced by factories. A model
may be a mapping, a namedtuple, a dataclass instance, or any object with
writable attributes.
"""

import copy
import dataclasses
from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, Optional

from modelfactory.core.errors import ConfigurationError, InvalidArgumentError


def collect_overrides(overrides: Optional[Mapping] = None, fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Combine a positional override mapping with keyword fields.

    Args:
        overrides: Optional mapping of field name to value
        fields: Keyword fields, these win over the mapping on collision

    Returns:
        A new dictionary of overrides

    Raises:
        InvalidArgumentError: If overrides is not a mapping
    """
    if overrides is None:
        overrides = {}
    elif not isinstance(overrides, Mapping):
        raise InvalidArgumentError(
            f"Overrides must be a mapping, got {type(overrides).__name__}",
            details={'type': type(overrides).__name__}
        )

    combined = dict(overrides)
    if fields:
        combined.update(fields)
    return combined


def copy_model(model: Any, mode: str = 'shallow') -> Any:
    """
    Copy blueprint output before overrides are merged.

    A shallow copy is left to merge_overrides(), which always builds a new
    top-level value. Nested values are shared unless mode is 'deep'.
    """
    if mode == 'shallow':
        return model
    if mode == 'deep':
        return copy.deepcopy(model)
    raise ConfigurationError(f"Invalid copy_mode: {mode}")


def merge_overrides(model: Any, overrides: Mapping) -> Any:
    """
    Shallow-merge overrides on top of a model.

    Override values win on key collision; every other field keeps the
    model's value. The input model is never mutated.

    - mutable mappings are copied with their own type, then updated
    - other mappings become a plain dict
    - namedtuples go through _replace()
    - frozen dataclasses go through dataclasses.replace(), which only
      accepts init fields
    - any other object, including non-frozen dataclasses, is copied and
      updated with setattr()

    Args:
        model: Blueprint output
        overrides: Mapping of field name to replacement value

    Returns:
        A new model of the same kind

    Raises:
        TypeError: If a frozen dataclass is given keys that are not init fields
    """
    if isinstance(model, MutableMapping):
        merged = copy.copy(model)
        merged.update(overrides)
        return merged

    if isinstance(model, Mapping):
        return {**model, **overrides}

    if isinstance(model, tuple) and hasattr(model, '_replace'):
        return model._replace(**overrides)

    if dataclasses.is_dataclass(model) and not isinstance(model, type) and model.__dataclass_params__.frozen:
        init_fields = {f.name for f in dataclasses.fields(model) if f.init}
        rejected = sorted(set(overrides) - init_fields)
        if rejected:
            raise TypeError(
                f"Frozen dataclass {type(model).__name__} only accepts init fields, got: {', '.join(rejected)}"
            )
        return dataclasses.replace(model, **overrides)

    merged = copy.copy(model)
    for key, value in overrides.items():
        setattr(merged, key, value)
    return merged
