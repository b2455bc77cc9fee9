from content_engines.icons.catalog import ICON_CATALOG, is_valid_icon, list_icons, search_icons


def test_known_icons_are_valid():
    for name in ("Award", "ShieldCheck", "Building2", "TrendingUp"):
        assert is_valid_icon(name)


def test_unknown_and_non_string_icons_are_rejected():
    assert not is_valid_icon("NotARealIcon")
    assert not is_valid_icon("award")
    assert not is_valid_icon("")
    assert not is_valid_icon(None)
    assert not is_valid_icon(42)


def test_catalog_is_immutable_and_listed_sorted():
    assert isinstance(ICON_CATALOG, frozenset)
    listed = list_icons()
    assert listed == sorted(listed)
    assert len(listed) == len(ICON_CATALOG)


def test_search_is_case_insensitive_and_limited():
    results = search_icons("shield")
    assert "Shield" in results
    assert "ShieldCheck" in results
    assert all("shield" in name.lower() for name in results)
    assert search_icons("", limit=3) == list_icons()[:3]
    assert search_icons("zzz-nothing") == []
