"""
Core types for the Dilovod API wire format.

Objects returned by the API are plain dicts and are never reshaped here;
these types only describe what goes out on the wire.
"""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

# =============================================================================
# Parameter helpers
# =============================================================================


def strip_defaults(params: Mapping[str, Any], zero_values: Mapping[str, Any]) -> dict[str, Any]:
    """
    Drop params whose value equals the zero value declared for that key.

    A value only matches when it has the same type as the zero value, so
    ``False`` is kept for a zero of ``0``. Keys without a declared zero value
    are always kept.

    Args:
        params: Params in the order they should be sent
        zero_values: Zero value per key (e.g., {"limit": 0, "fields": []})

    Returns:
        New dict with the non-default params, order preserved

    """
    stripped = {}
    for name, value in params.items():
        if name in zero_values:
            zero = zero_values[name]
            if type(value) is type(zero) and value == zero:
                continue
        stripped[name] = value
    return stripped


# =============================================================================
# Request Envelope
# =============================================================================


@dataclass(frozen=True)
class Envelope:
    """The JSON body of every API request."""

    action: str
    params: dict[str, Any]
    key: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for the request body."""
        return {
            "action": self.action,
            "params": self.params,
            "key": self.key,
        }

    def to_json(self) -> bytes:
        """Serialize the envelope as a UTF-8 JSON request body."""
        return json.dumps(self.to_dict()).encode("utf-8")


# =============================================================================
# Object Query
# =============================================================================


@dataclass
class ObjectQuery:
    """Criteria for a getObjects call."""

    type: str
    filter: dict[str, Any] = field(default_factory=dict)
    fields: list[str] = field(default_factory=list)
    order_by: str = ""
    limit: int = 0

    # Wire name -> value that means "not set"
    ZERO_VALUES = {
        "filter": {},
        "fields": [],
        "orderby": "",
        "limit": 0,
    }

    @classmethod
    def build(
        cls,
        type: str,
        filter: Mapping[str, Any] | None = None,
        fields: Sequence[str] | None = None,
        order_by: str = "",
        limit: int = 0,
    ) -> "ObjectQuery":
        """Create a query, normalizing filter/fields to dict/list."""
        return cls(
            type=type,
            filter=dict(filter or {}),
            fields=list(fields or []),
            order_by=order_by,
            limit=limit,
        )

    def to_params(self) -> dict[str, Any]:
        """Convert to request params, omitting anything left at its zero value."""
        params = {
            "type": self.type,
            "filter": self.filter,
            "fields": self.fields,
            "orderby": self.order_by,
            "limit": self.limit,
        }
        return strip_defaults(params, self.ZERO_VALUES)
