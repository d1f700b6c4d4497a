"""Tests for tag delta computation and application."""
import pytest

from natgateway.domain.nat_gateway import TagDelta
from natgateway.providers.aws.infrastructure.handlers.components import TagReconciler

TAG_CASES = [
    ({}, {}),
    (None, {"A": "1"}),
    ({"A": "1"}, None),
    ({"A": "1"}, {"A": "1", "B": "2"}),
    ({"A": "1", "B": "2"}, {"A": "1"}),
    ({"A": "1"}, {"A": "2"}),
    ({"A": "1", "B": "2"}, {"B": "3", "C": "4"}),
    ({"Name": "old", "Env": "dev"}, {"Name": "new", "Env": "dev", "Team": "net"}),
]


@pytest.mark.unit
class TestTagDelta:
    """Delta computation converges in either application order."""

    def setup_method(self):
        self.reconciler = TagReconciler()

    @pytest.mark.parametrize("previous,desired", TAG_CASES)
    def test_apply_add_first_converges(self, previous, desired):
        delta = self.reconciler.compute_delta(previous, desired)
        assert delta.apply(previous, add_first=True) == (desired or {})

    @pytest.mark.parametrize("previous,desired", TAG_CASES)
    def test_apply_remove_first_converges(self, previous, desired):
        delta = self.reconciler.compute_delta(previous, desired)
        assert delta.apply(previous, add_first=False) == (desired or {})

    def test_added_key(self):
        delta = self.reconciler.compute_delta({"A": "1"}, {"A": "1", "B": "2"})
        assert delta.to_add == frozenset({("B", "2")})
        assert delta.to_remove == frozenset()

    def test_removed_key(self):
        delta = self.reconciler.compute_delta({"A": "1", "B": "2"}, {"A": "1"})
        assert delta.to_add == frozenset()
        assert delta.to_remove == frozenset({("B", "2")})

    def test_changed_value_appears_in_both_sets(self):
        delta = self.reconciler.compute_delta({"A": "1"}, {"A": "2"})
        assert delta.to_add == frozenset({("A", "2")})
        assert delta.to_remove == frozenset({("A", "1")})

    def test_none_is_empty(self):
        assert self.reconciler.compute_delta(None, None).is_empty
        assert self.reconciler.compute_delta(None, {}).is_empty

    def test_identical_maps_give_empty_delta(self):
        assert self.reconciler.compute_delta({"A": "1"}, {"A": "1"}).is_empty

    def test_delta_is_immutable(self):
        delta = TagDelta(to_add=frozenset({("A", "1")}))
        with pytest.raises(Exception):
            delta.to_add = frozenset()

    def test_apply_removal_ignores_mismatched_value(self):
        delta = TagDelta(to_remove=frozenset({("A", "1")}))
        assert delta.apply({"A": "2"}) == {"A": "2"}
