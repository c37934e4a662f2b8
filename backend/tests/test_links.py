"""Tests for hypermedia link building."""

from app.schemas.link import Link
from app.shaping.links import attach_links, build_collection_links, build_resource_links
from app.shaping.pagination import PaginationMetadata


def page_href(page_number: int) -> str:
    return f"http://test/api/authors?orderBy=Name&pageNumber={page_number}&pageSize=10"


class TestBuildResourceLinks:
    def test_self_link_comes_first(self):
        links = build_resource_links(
            "http://test/api/authors/1?fields=id",
            [
                ("http://test/api/authors/1", "delete_author", "DELETE"),
                ("http://test/api/authors/1/courses", "courses", "GET"),
            ],
        )
        assert links == [
            Link(href="http://test/api/authors/1?fields=id", rel="self", method="GET"),
            Link(href="http://test/api/authors/1", rel="delete_author", method="DELETE"),
            Link(href="http://test/api/authors/1/courses", rel="courses", method="GET"),
        ]

    def test_self_only(self):
        assert [link.rel for link in build_resource_links("http://test/x")] == ["self"]


class TestBuildCollectionLinks:
    """Tests for build_collection_links()."""

    def test_first_page_has_next_only(self):
        links = build_collection_links(page_href, PaginationMetadata.calculate(25, 10, 1))
        assert [(link.rel, link.href) for link in links] == [
            ("self", page_href(1)),
            ("nextPage", page_href(2)),
        ]

    def test_middle_page_has_both(self):
        links = build_collection_links(page_href, PaginationMetadata.calculate(25, 10, 2))
        assert [(link.rel, link.href) for link in links] == [
            ("self", page_href(2)),
            ("nextPage", page_href(3)),
            ("previousPage", page_href(1)),
        ]

    def test_last_page_has_previous_only(self):
        links = build_collection_links(page_href, PaginationMetadata.calculate(25, 10, 3))
        assert [link.rel for link in links] == ["self", "previousPage"]

    def test_single_page_has_self_only(self):
        links = build_collection_links(page_href, PaginationMetadata.calculate(3, 10, 1))
        assert [link.rel for link in links] == ["self"]
        assert all(link.method == "GET" for link in links)


def test_attach_links_serializes_to_dicts():
    shaped = {"id": "1"}
    result = attach_links(shaped, [Link(href="http://test/x", rel="self", method="GET")])
    assert result is shaped
    assert result == {"id": "1", "links": [{"href": "http://test/x", "rel": "self", "method": "GET"}]}
