import routes
from utils.cache import TaggedCache
from utils.i18n import format_plural, t


def test_routes_round_trip():
    assert routes.url_for(routes.LIST) == "?page=list"
    assert routes.resolve({"page": "edit", "id": "12"}) == (routes.EDIT, 12)
    assert routes.resolve({"page": ["checkin"], "id": ["3"]}) == (routes.CHECKIN, 3)


def test_routes_fall_back_to_list():
    assert routes.resolve({}) == (routes.LIST, None)
    assert routes.resolve({"page": "admin"}) == (routes.LIST, None)
    assert routes.resolve({"page": "delete", "id": "abc"}) == (routes.LIST, None)


def test_tagged_cache_invalidates_by_tag():
    cache = TaggedCache()
    cache.set("a", 1, tags=["charts"])
    cache.set("b", 2, tags=["other"])
    cache.invalidate_tags(["charts"])
    assert cache.get("a") is None
    assert cache.get("b") == 2


def test_translation_placeholders():
    assert t("@completed/@total days (@percentage%)", completed=1, total=2, percentage="50.0") \
        == "1/2 days (50.0%)"
    assert format_plural(1, "1 item", "@count items") == "1 item"
    assert format_plural(4, "1 item", "@count items") == "4 items"


def test_tagged_cache_skips_values_from_an_older_generation():
    cache = TaggedCache()
    gen = cache.generation("charts")
    cache.invalidate_tags(["charts"])
    assert cache.set("a", "stale", tags=["charts"], generation=gen) is False
    assert cache.get("a") is None
    assert cache.set("a", "fresh", tags=["charts"], generation=cache.generation("charts")) is True
    assert cache.get("a") == "fresh"
