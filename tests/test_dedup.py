from linksift.engine import VerifiedLink
from linksift.engine.dedup import Deduplicator, deduplicate


def link(url, title="t"):
    return VerifiedLink(title=title, url=url, description="d")


def test_first_occurrence_wins_and_order_is_kept():
    links = [
        link("https://example.com/a", "first"),
        link("https://other.example/b", "other"),
        link("https://example.com/a?page=2", "second"),
        link("https://EXAMPLE.com/a", "third"),
        link("https://example.com/c", "last"),
    ]
    result = deduplicate(links)
    assert [item.title for item in result] == ["first", "other", "last"]


def test_scheme_does_not_distinguish_links():
    result = deduplicate([link("https://example.com/x"), link("http://example.com/x")])
    assert len(result) == 1


def test_empty_path_matches_root():
    result = deduplicate([link("https://example.com"), link("https://example.com/")])
    assert len(result) == 1


def test_trailing_slash_is_a_different_path():
    result = deduplicate([link("https://example.com/docs"), link("https://example.com/docs/")])
    assert len(result) == 2


def test_unparseable_urls_are_always_kept():
    result = deduplicate([link("not a url"), link("not a url")])
    assert len(result) == 2


def test_deduplicator_seen_and_reset():
    dedup = Deduplicator()
    first = link("https://example.com/a")
    assert not dedup.seen(first)
    assert dedup.seen(first)
    dedup.reset()
    assert not dedup.seen(first)
