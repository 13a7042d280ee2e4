"""Substate address codec.

The indexer encodes binary identifiers as tagged values:

    {"@@TAGGED@@": [<format tag>, [<byte>, <byte>, ...]]}

Position 0 is a format tag (currently ignored) and position 1 holds the
bytes. Canonical addresses are ``"<kind>_<hex>"``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from tari_bridge.exceptions import MalformedAddress

TAGGED_MARKER = "@@TAGGED@@"


class SubstateKind(str, Enum):
    """Address prefixes used by the indexer."""
    RESOURCE = "resource"
    VAULT = "vault"
    COMPONENT = "component"


@dataclass(frozen=True)
class TaggedValue:
    """A tagged binary value as received from the indexer."""
    tag: Any
    payload: list[int]

    @classmethod
    def from_wire(cls, obj: Any) -> "TaggedValue":
        """Parse the wire representation.

        Raises:
            MalformedAddress: If the marker is missing or the tagged
                structure does not have exactly two positions
        """
        if not isinstance(obj, dict) or TAGGED_MARKER not in obj:
            raise MalformedAddress(f"Not a tagged value: {obj!r}")

        parts = obj[TAGGED_MARKER]
        if not isinstance(parts, (list, tuple)) or len(parts) != 2:
            raise MalformedAddress(
                f"Tagged value must have exactly two positions, got {parts!r}"
            )

        tag, payload = parts
        if not isinstance(payload, (list, tuple)):
            raise MalformedAddress(f"Tagged payload is not a byte array: {payload!r}")

        return cls(tag=tag, payload=list(payload))


def bytes_to_hex(values: list[int]) -> str:
    """Hex-encode a byte array, two digits per byte."""
    out = []
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
            raise MalformedAddress(f"Invalid byte value: {value!r}")
        out.append(f"{value:02x}")
    return "".join(out)


def decode_tagged_address(tagged: Any, kind: Union[SubstateKind, str]) -> str:
    """Decode a tagged binary identifier into a canonical address string.

    Args:
        tagged: ``TaggedValue`` or its wire dict
        kind: Address kind used as the prefix

    Returns:
        ``"<kind>_<hex>"``
    """
    if not isinstance(tagged, TaggedValue):
        tagged = TaggedValue.from_wire(tagged)

    prefix = kind.value if isinstance(kind, SubstateKind) else kind
    return f"{prefix}_{bytes_to_hex(tagged.payload)}"


def decode_resource_address(tagged: Any) -> str:
    return decode_tagged_address(tagged, SubstateKind.RESOURCE)


def decode_vault_id(tagged: Any) -> str:
    return decode_tagged_address(tagged, SubstateKind.VAULT)
