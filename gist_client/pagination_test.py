"""Unit tests for pagination module."""

from .pagination import page_count, parse_link_header, resolve_pages

BASE = "https://api.github.com/users/octocat/gists?per_page=100"


def _link(**rels):
    return ", ".join(f'<{uri}>; rel="{rel}"' for rel, uri in rels.items())


def describe_parse_link_header():

    def it_maps_rels_to_uris():
        header = _link(next=f"{BASE}&page=2", last=f"{BASE}&page=3")
        assert parse_link_header(header) == {
            "next": f"{BASE}&page=2",
            "last": f"{BASE}&page=3",
        }

    def it_returns_empty_for_missing_header():
        assert parse_link_header(None) == {}
        assert parse_link_header("") == {}

    def it_skips_parts_without_uri_or_rel():
        header = f'garbage, <{BASE}&page=3>; rel="last", <{BASE}&page=1>'
        assert parse_link_header(header) == {"last": f"{BASE}&page=3"}


def describe_page_count():

    def it_reads_trailing_digits():
        assert page_count(f"{BASE}&page=12") == 12

    def it_returns_zero_without_trailing_digits():
        assert page_count(f"{BASE}&page=last") == 0


def describe_resolve_pages():

    def it_returns_nothing_without_header():
        assert resolve_pages(None) == []

    def it_builds_every_page_from_first_uri():
        header = _link(
            next=f"{BASE}&page=2",
            last=f"{BASE}&page=3",
            first=f"{BASE}&page=1",
        )
        assert resolve_pages(header) == [
            f"{BASE}&page=1",
            f"{BASE}&page=2",
            f"{BASE}&page=3",
        ]

    def it_uses_last_uri_when_first_is_missing():
        header = _link(next=f"{BASE}&page=2", last=f"{BASE}&page=4")
        pages = resolve_pages(header)
        assert len(pages) == 4
        assert pages[0] == f"{BASE}&page=1"
        assert pages[-1] == f"{BASE}&page=4"

    def it_returns_single_page_plan_when_last_is_first():
        header = _link(first=f"{BASE}&page=1", last=f"{BASE}&page=1")
        assert resolve_pages(header) == [f"{BASE}&page=1"]

    def it_treats_missing_last_as_single_page():
        header = _link(prev=f"{BASE}&page=1", first=f"{BASE}&page=1")
        assert resolve_pages(header) == []

    def it_treats_last_without_digits_as_single_page():
        header = _link(first=f"{BASE}&page=1", last=f"{BASE}&page=end")
        assert resolve_pages(header) == []

    def it_treats_first_without_digits_as_single_page():
        header = _link(first=f"{BASE}&page=first", last=f"{BASE}&page=3")
        assert resolve_pages(header) == []

    def it_treats_garbage_as_single_page():
        assert resolve_pages("not a link header") == []

    def it_only_replaces_the_trailing_index():
        uri = "https://api.github.com/gists?per_page=100&since=2017-07-01T00:00:00Z&page="
        header = _link(first=f"{uri}1", last=f"{uri}2")
        pages = resolve_pages(header)
        assert pages == [f"{uri}1", f"{uri}2"]
