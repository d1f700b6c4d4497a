"""Shared components for the NAT gateway handlers."""

from .tag_reconciler import DEFAULT_RESERVED_PREFIX, TagReconciler

__all__ = ["DEFAULT_RESERVED_PREFIX", "TagReconciler"]
