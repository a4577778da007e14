import pytest
from pydantic import ValidationError

from steam_api_browser.state.selection import (
    FocusField,
    ScrollIntoView,
    ScrollSidebarTop,
    SelectionState,
    TitleChanged,
    focus_credentials,
    navigate,
    page_title,
    parse_token,
    set_filter,
    set_from_token,
)

TITLE = "Steam Web API Documentation"


class TestSelectionState:
    def test_method_requires_interface(self):
        with pytest.raises(ValidationError):
            SelectionState(current_method="GetPlayerSummaries")

    def test_filter_excludes_interface(self):
        with pytest.raises(ValidationError):
            SelectionState(current_interface="ISteamUser", current_filter="news")


class TestTokens:
    def test_parse_token(self):
        assert parse_token("#ISteamUser/GetPlayerSummaries") == ("ISteamUser", "GetPlayerSummaries")
        assert parse_token("#ISteamUser") == ("ISteamUser", "")
        assert parse_token("") == ("", "")

    def test_extra_segments_ignored(self, catalog):
        assert parse_token("#ISteamUser/GetPlayerSummaries/extra") == ("ISteamUser", "GetPlayerSummaries")
        t = set_from_token(SelectionState(), catalog, "#ISteamUser/GetPlayerSummaries/extra", TITLE)
        assert t.state.current_method == "GetPlayerSummaries"

    def test_resolves_interface_and_method(self, catalog):
        t = set_from_token(SelectionState(), catalog, "#ISteamUser/GetPlayerSummaries", TITLE)
        assert (t.state.current_interface, t.state.current_method) == ("ISteamUser", "GetPlayerSummaries")
        assert TitleChanged(f"ISteamUser – {TITLE}") in t.effects
        assert ScrollIntoView("ISteamUser/GetPlayerSummaries") in t.effects

    def test_unknown_interface(self, catalog):
        t = set_from_token(SelectionState(), catalog, "#Unknown", TITLE)
        assert t.state == SelectionState()
        assert t.effects == []

    def test_unknown_method_keeps_interface(self, catalog):
        t = set_from_token(SelectionState(), catalog, "#ISteamUser/Nope", TITLE)
        assert (t.state.current_interface, t.state.current_method) == ("ISteamUser", "")

    def test_same_interface_does_not_scroll(self, catalog):
        state = SelectionState(current_interface="ISteamUser")
        t = set_from_token(state, catalog, "#ISteamUser/GetFriendList", TITLE)
        assert t.state.current_method == "GetFriendList"
        assert t.effects == []

    def test_clearing_selection_resets_title(self, catalog):
        state = SelectionState(current_interface="ISteamUser")
        t = set_from_token(state, catalog, "", TITLE)
        assert t.effects[0] == TitleChanged(TITLE)

    def test_opening_interface_ends_search(self, catalog):
        state = SelectionState(current_filter="news")
        t = set_from_token(state, catalog, "#ISteamNews", TITLE)
        assert t.state.current_filter == ""


class TestSetFilter:
    def test_first_filter_clears_interface_and_scrolls_top(self):
        state = SelectionState(current_interface="ISteamUser", current_method="GetFriendList")
        t = set_filter(state, "news", TITLE)
        assert t.state == SelectionState(current_filter="news")
        assert t.effects == [TitleChanged(TITLE), ScrollSidebarTop()]

    def test_refining_filter_does_not_scroll(self):
        t = set_filter(SelectionState(current_filter="new"), "news", TITLE)
        assert t.effects == []

    def test_clearing_filter_scrolls_to_interface(self):
        t = set_filter(SelectionState(current_filter="news"), "", TITLE)
        assert t.state == SelectionState()
        assert t.effects == [ScrollIntoView("")]

    def test_whitespace_is_no_filter(self):
        state = SelectionState(current_interface="ISteamUser", current_method="GetFriendList")
        t = set_filter(state, "   ", TITLE)
        assert t.state == state
        assert t.effects == []

    def test_whitespace_ends_search(self):
        t = set_filter(SelectionState(current_filter="news"), "   ", TITLE)
        assert t.state.current_filter == ""
        assert t.effects == [ScrollIntoView("")]


class TestNavigate:
    KEYS = ["IA", "IB", "IC"]

    def test_wraps_forward(self):
        t = navigate(SelectionState(current_interface="IC"), self.KEYS, 1, TITLE)
        assert t.state.current_interface == "IA"
        assert t.effects == [TitleChanged(f"IA – {TITLE}"), ScrollIntoView("IA")]

    def test_wraps_backward(self):
        t = navigate(SelectionState(current_interface="IA"), self.KEYS, -1, TITLE)
        assert t.state.current_interface == "IC"

    def test_round_trip(self):
        for name in self.KEYS:
            start = SelectionState(current_interface=name, current_method="M")
            forward = navigate(start, self.KEYS, 1).state
            back = navigate(forward, self.KEYS, -1).state
            assert back.current_interface == name
            assert back.current_method == ""

    def test_no_current_interface(self):
        assert navigate(SelectionState(), self.KEYS, 1).state.current_interface == "IA"
        assert navigate(SelectionState(), self.KEYS, -1).state.current_interface == "IC"

    def test_empty_visible_set_is_noop(self):
        state = SelectionState(current_filter="qqqq")
        t = navigate(state, [], 1)
        assert t.state is state
        assert t.effects == []

    def test_navigating_search_results_opens_interface(self):
        t = navigate(SelectionState(current_filter="i"), self.KEYS, 1)
        assert t.state == SelectionState(current_interface="IA")

    def test_rejects_bad_direction(self):
        with pytest.raises(ValueError):
            navigate(SelectionState(), self.KEYS, 2)


class TestFocusCredentials:
    def test_focuses_access_token_field(self):
        t = focus_credentials(SelectionState(current_interface="IA"), True, TITLE)
        assert t.state == SelectionState()
        assert t.effects == [TitleChanged(TITLE), FocusField("form-access-token")]

    def test_focuses_key_field(self):
        t = focus_credentials(SelectionState(), False, TITLE)
        assert t.effects == [FocusField("form-api-key")]


def test_page_title():
    assert page_title("ISteamUser", TITLE) == f"ISteamUser – {TITLE}"
    assert page_title("", TITLE) == TITLE
