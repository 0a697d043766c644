"""Service tier helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Tier(str, Enum):
    """Known service plans."""

    FREE = "FREE"
    PRO = "PRO"
    ULTRA = "ULTRA"


@dataclass
class TierDescriptor:
    """A tier offered to an account, as listed by the backend."""

    id: str | None
    is_default: bool = False

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> TierDescriptor:
        """Parse the wire shape ``{"id": ..., "isDefault": ...}``."""
        return cls(id=payload.get("id"), is_default=bool(payload.get("isDefault", False)))


def _as_descriptor(tier: TierDescriptor | Mapping[str, Any] | None) -> TierDescriptor | None:
    if tier is None or isinstance(tier, TierDescriptor):
        return tier
    return TierDescriptor.from_dict(tier)


def get_default_tier(
    tiers: Iterable[TierDescriptor | Mapping[str, Any] | None] | None,
) -> TierDescriptor | None:
    """Pick the default tier from an allowed-tiers list.

    Returns the first tier flagged as default, otherwise the first tier.
    An empty or missing list has no default.

    Args:
        tiers: Tier descriptors or raw ``allowedTiers`` dicts.

    Returns:
        The default descriptor, or None.
    """
    if not tiers:
        return None

    descriptors = [_as_descriptor(tier) for tier in tiers]
    if not descriptors:
        return None

    for descriptor in descriptors:
        if descriptor is not None and descriptor.is_default:
            return descriptor

    return descriptors[0]


def get_default_tier_id(
    tiers: Iterable[TierDescriptor | Mapping[str, Any] | None] | None,
) -> str | None:
    """Return the id of the default tier, or None when there is none."""
    descriptor = get_default_tier(tiers)
    return descriptor.id if descriptor is not None else None
