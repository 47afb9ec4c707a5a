"""
JSON conversion of the document model.

Every dataclass instance becomes a dict tagged with its class name under
"_type", so tree nodes, style entries and the three bullet variants can be
told apart again without any schema. Style maps and attribute maps are
plain string dicts and pass through untouched.
"""

import typing
from dataclasses import fields, is_dataclass

_TYPE_KEY = "_type"

# Class name -> dataclass, filled on first use
_MODEL_CLASSES: dict[str, type] = {}


def _model_classes() -> dict[str, type]:
    if not _MODEL_CLASSES:
        from odt2doctree import data_types

        for name, obj in vars(data_types).items():
            if isinstance(obj, type) and is_dataclass(obj):
                _MODEL_CLASSES[name] = obj
    return _MODEL_CLASSES


def _to_json(value: typing.Any) -> typing.Any:
    if is_dataclass(value) and not isinstance(value, type):
        tagged = {_TYPE_KEY: type(value).__name__}
        for item in fields(value):
            tagged[item.name] = _to_json(getattr(value, item.name))
        return tagged
    if isinstance(value, dict):
        return {str(name): _to_json(item) for name, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    return value


def _from_json(value: typing.Any) -> typing.Any:
    if isinstance(value, list):
        return [_from_json(item) for item in value]
    if not isinstance(value, dict):
        return value
    if _TYPE_KEY not in value:
        return {name: _from_json(item) for name, item in value.items()}

    type_name = value[_TYPE_KEY]
    cls = _model_classes().get(type_name)
    if cls is None:
        raise ValueError(f"Unknown model type: {type_name!r}")
    known = {item.name for item in fields(cls)}
    return cls(
        **{name: _from_json(item) for name, item in value.items() if name in known}
    )


def serialize_document(value: typing.Any) -> dict:
    """Convert a document (or any part of it) into JSON-compatible data."""
    serialized = _to_json(value)
    if isinstance(serialized, dict):
        return serialized
    return {"value": serialized}


def deserialize_document(data: dict) -> typing.Any:
    """
    Rebuild the model object a serialize_document() payload was made from.

    Raises:
        ValueError: If the payload is not a tagged dict, or names a class
            that is not part of the document model.

    Example:
        >>> document = next(read_file("report.odt"))
        >>> restored = deserialize_document(document.to_json())
        >>> assert restored == document
    """
    if not isinstance(data, dict):
        raise ValueError("Input must be a dictionary")
    if _TYPE_KEY not in data:
        raise ValueError(
            f"Input dictionary must contain '{_TYPE_KEY}' key for deserialization"
        )
    return _from_json(data)
