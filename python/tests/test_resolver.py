"""
Tests for agentattrs.resolver — destination resolution.
"""

import pytest

from agentattrs.config import AttributeConfig
from agentattrs.destinations import Destination
from agentattrs.resolver import resolve

ALL = Destination.ALL
NONE = Destination.NONE
EVENT = Destination.TXN_EVENT
TRACE = Destination.TXN_TRACE
ERROR = Destination.ERROR
BROWSER = Destination.BROWSER


@pytest.fixture
def config():
    return AttributeConfig()


class TestNoRules:
    def test_default_returned(self, config):
        assert resolve("foo", EVENT | ERROR, config) == EVENT | ERROR

    def test_unmatched_rule_ignored(self, config):
        config.modify_destinations("bar*", NONE, ALL)
        assert resolve("foo", ALL, config) == ALL

    def test_int_default(self, config):
        result = resolve("foo", 3, config)
        assert isinstance(result, Destination)
        assert result == EVENT | TRACE


class TestWildcard:
    """A trailing-wildcard modifier applies to every key with its prefix."""

    @pytest.mark.parametrize("key", ["request.", "request.uri", "request.headers.host"])
    def test_prefix_keys_match(self, config, key):
        config.modify_destinations("request.*", BROWSER, ERROR)
        assert resolve(key, EVENT | ERROR, config) == EVENT | BROWSER

    def test_shorter_key_does_not_match(self, config):
        config.modify_destinations("request.*", BROWSER, NONE)
        assert resolve("request", EVENT, config) == EVENT

    def test_lone_star_matches_all_keys(self, config):
        config.modify_destinations("*", NONE, TRACE)
        assert resolve("anything", ALL, config) == ALL.without(TRACE)


class TestSpecificity:
    """The most specific matching modifier decides."""

    def test_more_specific_include_beats_general_exclude(self, config):
        config.modify_destinations("request.*", NONE, ALL)
        config.modify_destinations("request.uri", BROWSER, NONE)
        assert resolve("request.uri", EVENT, config) == EVENT | BROWSER
        assert resolve("request.method", EVENT, config) == NONE

    def test_call_order_irrelevant(self, config):
        config.modify_destinations("request.uri", BROWSER, NONE)
        config.modify_destinations("request.*", NONE, ALL)
        assert resolve("request.uri", EVENT, config) == EVENT | BROWSER

    def test_more_specific_exclude_beats_general_include(self, config):
        config.modify_destinations("a*", ALL, NONE)
        config.modify_destinations("abc*", NONE, EVENT)
        assert resolve("abcd", NONE, config) == NONE
        assert resolve("abd", NONE, config) == ALL

    def test_less_specific_rule_ignored_entirely(self, config):
        config.modify_destinations("a*", NONE, ERROR)
        config.modify_destinations("ab*", BROWSER, NONE)
        # ERROR exclusion from "a*" does not apply once "ab*" matches.
        assert resolve("abc", ERROR, config) == ERROR | BROWSER


class TestEqualSpecificity:
    """Modifiers tied on specificity are or-ed together."""

    def test_exact_and_wildcard_same_prefix_union(self, config):
        config.modify_destinations("ab*", BROWSER, NONE)
        config.modify_destinations("ab", TRACE, ERROR)
        assert resolve("ab", ERROR, config) == TRACE | BROWSER

    def test_exclude_from_either_wins(self, config):
        config.modify_destinations("ab", EVENT, NONE)
        config.modify_destinations("ab*", NONE, EVENT)
        assert resolve("ab", NONE, config) == NONE

    def test_empty_and_star_union(self, config):
        config.modify_destinations("", BROWSER, NONE)
        config.modify_destinations("*", NONE, ERROR)
        assert resolve("k", ERROR | EVENT, config) == EVENT | BROWSER


class TestSamePattern:
    def test_merged_rule_exclude_wins(self, config):
        config.modify_destinations("a*", EVENT, NONE)
        config.modify_destinations("a*", NONE, EVENT)
        assert len(config.rules) == 1
        assert not resolve("abc", EVENT, config) & EVENT
        assert resolve("abc", EVENT | TRACE, config) == TRACE


class TestDisabled:
    """Disabled destinations beat every include."""

    def test_disabled_removed_from_default(self, config):
        config.disable_destinations(ERROR)
        assert resolve("foo", ALL, config) == ALL.without(ERROR)

    @pytest.mark.parametrize("pattern", ["foo", "f*", "*", ""])
    def test_include_cannot_reenable(self, config, pattern):
        config.disable_destinations(BROWSER)
        config.modify_destinations(pattern, ALL, NONE)
        assert not resolve("foo", NONE, config) & BROWSER

    def test_disable_after_modify(self, config):
        config.modify_destinations("foo", BROWSER, NONE)
        config.disable_destinations(BROWSER)
        assert resolve("foo", NONE, config) == NONE

    def test_request_scenario(self, config):
        config.disable_destinations(ERROR)
        config.modify_destinations("request.*", BROWSER, NONE)
        assert resolve("request.uri", EVENT, config) == EVENT | BROWSER

    def test_everything_disabled(self, config):
        config.disable_destinations(ALL)
        config.modify_destinations("*", ALL, NONE)
        assert resolve("foo", ALL, config) == NONE
