"""Presence checks run before value comparison."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .errors import CheckFailure
from .models import FieldBucket, FieldSet
from .paths import MISSING, get_field, is_record, is_sequence

logger = logging.getLogger(__name__)


def _is_present(value: Any) -> bool:
    return value is not MISSING and value is not None


def _is_filled_record(value: Any) -> bool:
    return is_record(value) and len(value) > 0


_RULES: dict[FieldBucket, tuple[Callable[[Any], bool], str]] = {
    FieldBucket.SCALAR: (_is_present, "it should return"),
    FieldBucket.OBJECT: (_is_filled_record, "it should be not empty"),
    FieldBucket.ARRAY: (is_sequence, "it should be array"),
}


def verify_required_fields(
    field_set: FieldSet | Mapping[str, Any],
    data: Any,
    path: str = "",
) -> None:
    """
    Verify presence and shape of required fields.

    Args:
        field_set: buckets of field names (scalar, object, array)
        data: the record holding the fields
        path: optional field of `data` holding the record to inspect

    Raises:
        CheckFailure: on the first field violating its bucket
    """
    field_set = FieldSet.coerce(field_set)
    for bucket, fields in field_set.buckets():
        if not fields:
            continue
        verify, error_message = _RULES[bucket]
        logger.debug(f"Verifying {len(fields)} {bucket.value} field(s)")

        for name in fields:
            value = _lookup(data, [path, name] if path else [name])
            if not verify(value):
                raise CheckFailure(
                    f'Error in "Check.required_fields": {error_message} "{name}"',
                    path=f"{path}.{name}" if path else name,
                    actual=None if value is MISSING else value,
                )


def _lookup(data: Any, keys: list[str]) -> Any:
    value = data
    for key in keys:
        if not is_record(value):
            return MISSING
        value = get_field(value, key)
    return value
