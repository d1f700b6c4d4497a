"""Tag reconciliation utility for the NAT gateway handlers.

Computes the additions and removals needed to move a resource from one tag
map to another, and keeps system-reserved tags out of both user-visible
views and diffs.
"""
from typing import Dict, Iterable, Optional

from natgateway.domain.handler.request import ResourceHandlerRequest
from natgateway.domain.nat_gateway.value_objects import TagDelta

DEFAULT_RESERVED_PREFIX = "aws:"


class TagReconciler:
    """Pure tag diffing and filtering."""

    def __init__(self, reserved_prefix: str = DEFAULT_RESERVED_PREFIX):
        self.reserved_prefix = reserved_prefix

    def is_reserved(self, key: str) -> bool:
        return bool(self.reserved_prefix) and key.startswith(self.reserved_prefix)

    def filter_reserved(self, tags: Optional[Dict[str, str]]) -> Dict[str, str]:
        """Drop tags whose key carries the reserved prefix. None yields {}."""
        return {k: v for k, v in (tags or {}).items() if not self.is_reserved(k)}

    def merge(self, *tag_maps: Optional[Dict[str, str]]) -> Dict[str, str]:
        """
        Merge tag maps left to right, later maps winning on key clashes.

        Reserved keys are removed from the result.
        """
        merged: Dict[str, str] = {}
        for tags in tag_maps:
            if tags:
                merged.update(tags)
        return self.filter_reserved(merged)

    def desired_tags(self, request: ResourceHandlerRequest) -> Dict[str, str]:
        """
        Tags the gateway should carry after this request.

        Stack-level tags come first, then system tags, then the model's own
        tags, so a key set on the model always wins.
        """
        model = request.desired_resource_state
        return self.merge(request.desired_resource_tags, request.system_tags,
                          model.tags if model else None)

    def previous_tags(self, request: ResourceHandlerRequest) -> Dict[str, str]:
        """Tags the gateway was given by the previous request, merged like desired_tags."""
        model = request.previous_resource_state
        return self.merge(request.previous_resource_tags, request.previous_system_tags,
                          model.tags if model else None)

    def compute_delta(self, previous: Optional[Dict[str, str]],
                      desired: Optional[Dict[str, str]]) -> TagDelta:
        """
        Compute the symmetric difference between two tag maps.

        Args:
            previous: Tags currently applied (None is treated as empty)
            desired: Tags that should be applied (None is treated as empty)

        Returns:
            TagDelta where applying to_add and to_remove to previous, in
            either order, yields desired
        """
        previous_pairs = set(self.filter_reserved(previous).items())
        desired_pairs = set(self.filter_reserved(desired).items())
        return TagDelta(
            to_add=frozenset(desired_pairs - previous_pairs),
            to_remove=frozenset(previous_pairs - desired_pairs),
        )

    @staticmethod
    def as_map(pairs: Iterable) -> Dict[str, str]:
        """Convert (key, value) pairs to a tag map."""
        return dict(pairs)
