"""
Tests for agentattrs.destinations — destination bit flags.
"""

import pytest

from agentattrs.destinations import Destination
from agentattrs.errors import InvalidDestinationError


class TestBitValues:
    """The bit values are part of the public interface."""

    def test_none(self):
        assert Destination.NONE == 0

    def test_txn_event(self):
        assert Destination.TXN_EVENT == 1

    def test_txn_trace(self):
        assert Destination.TXN_TRACE == 2

    def test_error(self):
        assert Destination.ERROR == 4

    def test_browser(self):
        assert Destination.BROWSER == 8

    def test_all_is_union_of_four(self):
        assert Destination.ALL == 15
        assert Destination.ALL == (
            Destination.TXN_EVENT | Destination.TXN_TRACE | Destination.ERROR | Destination.BROWSER
        )


class TestSetOperations:
    def test_union(self):
        dests = Destination.TXN_EVENT | Destination.ERROR
        assert dests == 5

    def test_intersection(self):
        dests = (Destination.TXN_EVENT | Destination.ERROR) & Destination.ERROR
        assert dests == Destination.ERROR

    def test_without(self):
        assert Destination.ALL.without(Destination.ERROR) == 11

    def test_without_absent_bit_is_noop(self):
        assert Destination.TXN_EVENT.without(Destination.BROWSER) == Destination.TXN_EVENT

    def test_without_stays_within_all(self):
        assert Destination.NONE.without(Destination.ALL) == Destination.NONE

    def test_intersects(self):
        assert Destination.ALL.intersects(Destination.BROWSER)
        assert not Destination.TXN_EVENT.intersects(Destination.TXN_TRACE)
        assert not Destination.ALL.intersects(Destination.NONE)


class TestCoerce:
    """Destination.coerce() accepts only bitmasks within ALL."""

    def test_int_to_destination(self):
        dests = Destination.coerce(3)
        assert isinstance(dests, Destination)
        assert dests == Destination.TXN_EVENT | Destination.TXN_TRACE

    def test_destination_returned_unchanged(self):
        assert Destination.coerce(Destination.BROWSER) is Destination.BROWSER

    def test_bits_outside_all_rejected(self):
        with pytest.raises(InvalidDestinationError):
            Destination.coerce(16)

    def test_negative_rejected(self):
        with pytest.raises(InvalidDestinationError):
            Destination.coerce(-1)

    def test_bool_rejected(self):
        with pytest.raises(InvalidDestinationError):
            Destination.coerce(True)

    def test_string_rejected(self):
        with pytest.raises(InvalidDestinationError):
            Destination.coerce("ALL")


class TestFromNames:
    def test_setting_names(self):
        dests = Destination.from_names(["transaction_events", "error_collector"])
        assert dests == Destination.TXN_EVENT | Destination.ERROR

    def test_member_names_case_insensitive(self):
        assert Destination.from_names(["BROWSER", "Txn_Trace"]) == (
            Destination.BROWSER | Destination.TXN_TRACE
        )

    def test_empty(self):
        assert Destination.from_names([]) == Destination.NONE

    def test_unknown_name(self):
        with pytest.raises(InvalidDestinationError, match="Unknown destination"):
            Destination.from_names(["span_events"])
