import pytest

from middleware.errors import InvalidParameter
from services import query_builder


def test_pagination_defaults():
    assert query_builder.parse_pagination(None, None) == (1, 6)
    assert query_builder.parse_pagination("", "", default_limit=10) == (1, 10)


def test_pagination_parses_integers():
    assert query_builder.parse_pagination("3", "20") == (3, 20)


@pytest.mark.parametrize(
    "page,limit",
    [("0", "6"), ("1", "0"), ("-2", "6"), ("abc", "6"), ("1", "2.5"),
     ("1_0", "6"), ("\uff11", "6"), ("1", "6\n7")],
)
def test_pagination_rejects_bad_values(page, limit):
    with pytest.raises(InvalidParameter) as exc_info:
        query_builder.parse_pagination(page, limit)
    assert exc_info.value.status_code == 400
    assert "page or limit" in exc_info.value.detail


def test_status_absent_is_not_false():
    assert query_builder.parse_status(None) is None
    assert query_builder.parse_status("false") is False
    assert query_builder.parse_status("true") is True
    # anything present but not "true" filters on False
    assert query_builder.parse_status("") is False


def test_search_filter_ors_every_field():
    query = query_builder.build_search_filter("acme", ["name", "email"])
    assert query == {
        "$or": [
            {"name": {"$regex": "acme", "$options": "i"}},
            {"email": {"$regex": "acme", "$options": "i"}},
        ]
    }


def test_search_filter_is_literal():
    query = query_builder.build_search_filter("a.b(", ["name"])
    assert query["$or"][0]["name"]["$regex"] == r"a\.b\("


def test_empty_search_means_no_filter():
    assert query_builder.build_search_filter("", ["name"]) == {}
    assert query_builder.build_filter(None, ["name"]) == {}


def test_build_filter_combines_status_and_search():
    query = query_builder.build_filter("x", ["name"], status=False)
    assert query["status"] is False
    assert "$or" in query


@pytest.mark.parametrize("count,limit,expected", [(0, 6, 0), (5, 2, 3), (6, 6, 1), (7, 6, 2)])
def test_total_pages(count, limit, expected):
    assert query_builder.total_pages(count, limit) == expected


def test_skip_for():
    assert query_builder.skip_for(1, 6) == 0
    assert query_builder.skip_for(3, 4) == 8
