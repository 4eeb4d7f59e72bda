"""
Tests for event-name normalization.
"""

from unittest.mock import Mock

from devents.core.events.api import events_api, iter_events


def collect(events, name, callback, opts):
    events.append((name, callback))
    return events


class TestIterEvents:
    """Test cases for iter_events and events_api."""

    def test_single_name(self):
        callback = Mock()
        assert list(iter_events("change", callback, {})) == [("change", callback)]

    def test_space_separated_names_in_order(self):
        callback = Mock()
        pairs = list(iter_events(" change\n blur  focus ", callback, {}))
        assert pairs == [("change", callback), ("blur", callback), ("focus", callback)]

    def test_mapping_in_iteration_order(self):
        fn1, fn2 = Mock(), Mock()
        pairs = list(iter_events({"b": fn2, "a": fn1}, None, {"context": None}))
        assert pairs == [("b", fn2), ("a", fn1)]

    def test_mapping_keys_may_be_space_separated(self):
        fn = Mock()
        pairs = list(iter_events({"a b": fn}, None, {}))
        assert pairs == [("a", fn), ("b", fn)]

    def test_mapping_reinterprets_callback_as_context(self):
        ctx = object()
        opts = {"context": None}
        list(iter_events({"a": Mock()}, ctx, opts))
        assert opts["context"] is ctx

    def test_mapping_keeps_explicit_context(self):
        ctx, other = object(), object()
        opts = {"context": ctx}
        list(iter_events({"a": Mock()}, other, opts))
        assert opts["context"] is ctx

    def test_mapping_without_context_slot(self):
        opts = {"offer": Mock()}
        list(iter_events({"a": Mock()}, object(), opts))
        assert "context" not in opts

    def test_events_api_returns_accumulator(self):
        callback = Mock()
        result = events_api(collect, [], "a b", callback, {})
        assert result == [("a", callback), ("b", callback)]

    def test_events_api_uses_returned_accumulator(self):
        def replace(events, name, callback, opts):
            return events + [name]

        assert events_api(replace, [], {"x": Mock(), "y z": Mock()}, None, {}) == [
            "x",
            "y",
            "z",
        ]
