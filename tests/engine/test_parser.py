from __future__ import annotations

import pytest

from linksift.config import ParserConfig
from linksift.engine import CandidateParser, LinkCandidate


def test_parse_triple_strips_ordinal() -> None:
    parser = CandidateParser()
    candidate = parser.parse_line("1. Example Docs|||https://example.com/docs/|||Official documentation")
    assert candidate == LinkCandidate(
        title="Example Docs",
        url="https://example.com/docs/",
        description="Official documentation",
    )


def test_parse_markdown_link() -> None:
    parser = CandidateParser()
    candidate = parser.parse_line("[Example](https://example.com) - a site")
    assert candidate == LinkCandidate(title="Example", url="https://example.com", description="a site")


def test_plain_text_yields_nothing() -> None:
    assert CandidateParser().parse_line("Just some text with no links") is None
    assert CandidateParser().parse("Just some text with no links") == []


def test_markdown_without_description_uses_placeholder() -> None:
    candidate = CandidateParser().parse_line("[Python](https://python.org)")
    assert candidate is not None
    assert candidate.description == "No description available"


def test_markdown_placeholder_is_configurable() -> None:
    parser = CandidateParser(ParserConfig(placeholder_description="n/a"))
    assert parser.parse_line("[Python](https://python.org)").description == "n/a"


def test_markdown_inside_list_item_with_ordinal_title() -> None:
    candidate = CandidateParser().parse_line("- [3. Rust Book](https://doc.rust-lang.org/book/) The book")
    assert candidate == LinkCandidate(
        title="Rust Book",
        url="https://doc.rust-lang.org/book/",
        description="The book",
    )


@pytest.mark.parametrize(
    "line",
    [
        "Title|||example.com|||missing scheme",
        "|||https://example.com|||no title",
        "Title||| |||blank url",
        "[Docs](ftp://example.com/docs) - wrong scheme",
        "[Docs](/relative) - relative link",
        "Title|||https://example.com",
    ],
)
def test_rejected_lines(line: str) -> None:
    assert CandidateParser().parse_line(line) is None


def test_extra_triple_fields_are_ignored() -> None:
    candidate = CandidateParser().parse_line(" A | B |||  http://a.example/x |||desc|||extra ")
    assert candidate == LinkCandidate(title="A | B", url="http://a.example/x", description="desc")


def test_demo_lines_are_skipped() -> None:
    text = "\n".join(
        [
            "Demo Mode: Example answer",
            "MDN|||https://developer.mozilla.org/|||Docs",
            "demo mode|||https://example.com|||should be skipped",
        ]
    )
    candidates = CandidateParser().parse(text)
    assert [candidate.title for candidate in candidates] == ["MDN"]


def test_parse_mixed_formats_line_by_line() -> None:
    text = """
Here are some resources:

1. MDN Web Docs|||https://developer.mozilla.org/en-US/docs/Web|||Reference for the web platform
2. [javascript.info](https://javascript.info/) - Modern tutorial
3. Not a link at all
4. Eloquent JavaScript|||https://eloquentjavascript.net/|||Free book
"""
    candidates = CandidateParser().parse(text)
    assert [(c.title, c.url) for c in candidates] == [
        ("MDN Web Docs", "https://developer.mozilla.org/en-US/docs/Web"),
        ("javascript.info", "https://javascript.info/"),
        ("Eloquent JavaScript", "https://eloquentjavascript.net/"),
    ]


def test_parse_empty_text() -> None:
    assert CandidateParser().parse("") == []
    assert CandidateParser().parse("\n  \n") == []
