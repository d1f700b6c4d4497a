"""NAT gateway value objects - remote states, connectivity and tag deltas."""
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

TagPair = Tuple[str, str]


class NatGatewayState(str, Enum):
    """States reported by DescribeNatGateways."""
    PENDING = "pending"
    AVAILABLE = "available"
    FAILED = "failed"
    DELETING = "deleting"
    DELETED = "deleted"

    @classmethod
    def from_remote(cls, value: Optional[str]) -> Optional['NatGatewayState']:
        """Parse a state string case-insensitively; unknown values yield None."""
        if not value:
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None

    @property
    def is_in_progress(self) -> bool:
        return self in (NatGatewayState.PENDING, NatGatewayState.DELETING)

    @property
    def is_failure_terminal(self) -> bool:
        return self is NatGatewayState.FAILED

    @property
    def is_deleted(self) -> bool:
        return self is NatGatewayState.DELETED


class ConnectivityType(str, Enum):
    """Whether the gateway has a public address or is private-only."""
    PUBLIC = "public"
    PRIVATE = "private"


class TagDelta(BaseModel):
    """
    Difference between a previous and a desired tag map.

    A key whose value changed appears in both sets: its old pair in
    ``to_remove`` and its new pair in ``to_add``.
    """
    model_config = ConfigDict(frozen=True)

    to_add: FrozenSet[TagPair] = Field(default_factory=frozenset)
    to_remove: FrozenSet[TagPair] = Field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    def apply(self, tags: Optional[Dict[str, str]], add_first: bool = True) -> Dict[str, str]:
        """
        Apply the delta to a tag map the way EC2 does.

        CreateTags overwrites values; DeleteTags with a value only removes the
        tag when the stored value still matches.
        """
        result = dict(tags or {})

        def _add():
            for key, value in self.to_add:
                result[key] = value

        def _remove():
            for key, value in self.to_remove:
                if result.get(key) == value:
                    del result[key]

        if add_first:
            _add()
            _remove()
        else:
            _remove()
            _add()
        return result
