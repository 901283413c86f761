from urllib.parse import parse_qsl

from llmapi.request import ApiRequest, HttpMethod, Pagination, encode_query


def test_encode_query_sorts_keys():
    assert encode_query([("b", "2"), ("a", "1")]) == "a=1&b=2"


def test_encode_query_escapes_reserved_characters():
    assert encode_query([("q", "hello world/x")]) == "q=hello+world%2Fx"


def test_encode_query_empty():
    assert encode_query([]) == ""


def test_encode_query_round_trip():
    items = [("run_id", "run_abc123"), ("after", "obj foo"), ("limit", "1")]
    assert parse_qsl(encode_query(items)) == sorted(items)


def test_encode_query_keeps_value_order_within_key():
    items = [("k", "2"), ("a", "x"), ("k", "1")]
    assert parse_qsl(encode_query(items)) == [("a", "x"), ("k", "2"), ("k", "1")]


def test_pagination_empty_has_no_items():
    assert Pagination().query_items() == []


def test_pagination_all_fields():
    pagination = Pagination(limit=20, order="desc", after="asst_abc122", before="asst_abc124")
    assert pagination.query_items() == [
        ("limit", "20"),
        ("order", "desc"),
        ("after", "asst_abc122"),
        ("before", "asst_abc124"),
    ]


def test_pagination_partial_fields():
    assert Pagination(before="obj_bar").query_items() == [("before", "obj_bar")]


def test_url_suffix_without_query_is_path():
    request = ApiRequest(HttpMethod.GET, "/threads/thread_abc123/runs")
    assert request.url_suffix() == "/threads/thread_abc123/runs"


def test_url_suffix_with_query():
    pagination = Pagination(limit=20, order="desc", after="a", before="b")
    request = ApiRequest(
        HttpMethod.GET, "/vector_stores", query=tuple(pagination.query_items())
    )
    suffix = request.url_suffix()
    path, _, query = suffix.partition("?")
    assert path == "/vector_stores"
    assert parse_qsl(query) == sorted(pagination.query_items())