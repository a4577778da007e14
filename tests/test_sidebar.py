from steam_api_browser.views.sidebar import classify_interface, filtered_view, sidebar_groups


class TestFilteredView:
    def test_empty_filter_is_identity(self, catalog, index):
        assert filtered_view(catalog, index, "") is catalog
        assert filtered_view(catalog, index, "  ") is catalog

    def test_slash_matches_either_name(self, catalog, index):
        view = filtered_view(catalog, index, "ISteamUser/GetFriendList")
        assert list(view)[0] == "ISteamUser"
        assert list(view["ISteamUser"])[0] == "GetFriendList"
        assert set(view["ISteamUser"]) == {"GetFriendList", "GetPlayerSummaries"}

    def test_results_come_from_catalog_and_match(self, catalog, index):
        query = "getdetails"
        view = filtered_view(catalog, index, query)
        assert view
        for interface_name, methods in view.items():
            for method_name, method in methods.items():
                assert catalog[interface_name][method_name] is method
                assert (
                    index.field_distance(query, interface_name) is not None
                    or index.field_distance(query, method_name) is not None
                )

    def test_no_matches(self, catalog, index):
        assert filtered_view(catalog, index, "qqqqxx") == {}


class TestClassifyInterface:
    def test_game_suffixes(self):
        assert classify_interface("ICSGOServers_730") == "CSGO"
        assert classify_interface("IDOTA2Match_570") == "Dota"
        assert classify_interface("ITFItems_440") == "Other Games"
        assert classify_interface("ISteamUser") == ""
        assert classify_interface("ISteamUser", "All interfaces") == "All interfaces"

    def test_first_rule_wins(self):
        assert classify_interface("IDOTA2Match_570_730") == "CSGO"
        assert classify_interface("ITest_730_570") == "Dota"

    def test_digits_must_follow_underscore(self):
        assert classify_interface("IEconItems730") == ""


class TestSidebarGroups:
    def test_fixed_group_order(self, catalog):
        groups = sidebar_groups(catalog, favorites_count=0, active_filter="")
        assert list(groups) == ["", "CSGO", "Dota", "Other Games"]
        assert list(groups["CSGO"]) == ["ICSGOServers_730"]
        assert list(groups["Dota"]) == ["IDOTA2Match_570"]
        assert list(groups["Other Games"]) == ["ITFItems_440"]

    def test_favorites_label_default_group(self, catalog):
        groups = sidebar_groups(catalog, favorites_count=2, active_filter="")
        assert list(groups)[0] == "All interfaces"
        assert "ISteamUser" in groups["All interfaces"]

    def test_empty_groups_kept(self):
        groups = sidebar_groups({}, favorites_count=0, active_filter="")
        assert groups == {"": {}, "CSGO": {}, "Dota": {}, "Other Games": {}}

    def test_partitions_every_interface_once(self, catalog):
        groups = sidebar_groups(catalog, favorites_count=0, active_filter="")
        seen = [name for group in groups.values() for name in group]
        assert sorted(seen) == sorted(catalog)

    def test_single_group_while_filtering(self, catalog, index):
        view = filtered_view(catalog, index, "news")
        groups = sidebar_groups(view, favorites_count=3, active_filter="news")
        assert groups == {"": view}
