import datetime as dt
import json
from wsgiref.util import setup_testing_defaults

import pytest

from abtanalytics.aggregator import Aggregator
from abtanalytics.api import Handler, make_app, parse_query_int
from abtanalytics.docs import default_swagger_info, swagger_spec
from abtanalytics.models import Transaction


def _aggregator():
    agg = Aggregator()
    for tx in [
        Transaction(
            country="US",
            product_name="Gadget",
            total_price=500,
            quantity=10,
            stock_quantity=100,
            transaction_date=dt.date(2025, 2, 10),
            region="NY",
        ),
        Transaction(
            country="US",
            product_name="Widget",
            total_price=200,
            quantity=5,
            stock_quantity=50,
            transaction_date=dt.date(2025, 2, 15),
            region="NY",
        ),
        Transaction(
            country="CA",
            product_name="Gadget",
            total_price=300,
            quantity=3,
            stock_quantity=80,
            transaction_date=dt.date(2025, 1, 5),
            region="Toronto",
        ),
    ]:
        agg.process(tx)
    return agg


def _call(app, path, query=""):
    environ = {"PATH_INFO": path, "QUERY_STRING": query}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body


@pytest.mark.parametrize(
    "value, default, expected",
    [
        ("5", 1, 5),
        ("+4", 1, 4),
        ("0", 7, 7),
        ("-3", 7, 7),
        ("abc", 20, 20),
        ("", 10, 10),
        (" 4", 1, 1),
        ("99999999999999999999", 3, 3),
    ],
)
def test_parse_query_int(value, default, expected):
    assert parse_query_int(value, default) == expected


def test_country_summary_defaults_match_aggregator():
    agg = _aggregator()
    expected = [s.to_dict() for s in agg.country_revenue_summary_paginated(0, 20, 10)]
    assert Handler(agg).country_summary({}) == expected


def test_country_summary_paging():
    result = Handler(_aggregator()).country_summary({"page": "2", "size": "1"})
    assert [c["country"] for c in result] == ["CA"]


def test_country_summary_invalid_page_falls_back_to_first():
    handler = Handler(_aggregator())
    assert handler.country_summary({"page": "0"}) == handler.country_summary({})


def test_country_summary_product_cap():
    result = Handler(_aggregator()).country_summary({"products": "1"})
    assert all(len(c["products"]) <= 1 for c in result)
    assert result[0]["products"][0]["product_name"] == "Gadget"


def test_top_products_and_regions():
    handler = Handler(_aggregator())
    products = handler.top_products()
    assert products[0]["product_name"] == "Gadget"
    assert [r["region"] for r in handler.top_regions()] == ["NY", "Toronto"]


def test_monthly_sales_sorted():
    sales = Handler(_aggregator()).monthly_sales()
    volumes = [s["volume"] for s in sales]
    assert volumes == sorted(volumes, reverse=True)


def test_empty_aggregator_results():
    handler = Handler(Aggregator())
    assert handler.top_products() is None
    assert handler.monthly_sales() is None
    assert handler.top_regions() is None
    assert handler.country_summary({}) == []


def test_app_serves_json_with_cors():
    agg = _aggregator()
    app = make_app(agg, default_swagger_info())
    status, headers, body = _call(app, "/api/products/top")
    assert status.startswith("200")
    assert headers["Access-Control-Allow-Origin"] == "*"
    assert headers["Content-Type"] == "application/json"
    assert json.loads(body) == Handler(agg).top_products()


def test_app_passes_query():
    agg = _aggregator()
    app = make_app(agg)
    _, _, body = _call(app, "/api/revenue/country/summary", "page=2&size=1")
    assert json.loads(body) == Handler(agg).country_summary({"page": "2", "size": "1"})


def test_app_empty_ranking_is_null():
    _, _, body = _call(make_app(Aggregator()), "/api/regions/top")
    assert json.loads(body) is None


def test_app_escapes_html_characters():
    agg = Aggregator()
    agg.process(Transaction(country="US", product_name="A&B", region="R", quantity=1))
    _, _, body = _call(make_app(agg), "/api/products/top")
    assert b"\\u0026" in body
    assert json.loads(body)[0]["product_name"] == "A&B"


def test_app_unknown_path_not_found():
    status, _, _ = _call(make_app(_aggregator()), "/api/unknown")
    assert status.startswith("404")


def test_app_swagger_doc():
    info = default_swagger_info()
    status, _, body = _call(make_app(_aggregator(), info), "/swagger/doc.json")
    assert status.startswith("200")
    assert json.loads(body) == swagger_spec(info)


def test_app_swagger_redirects():
    app = make_app(_aggregator())
    status, headers, _ = _call(app, "/swagger")
    assert status.startswith("301")
    assert headers["Location"] == "/swagger/"
    status, headers, _ = _call(app, "/swagger/")
    assert headers["Location"] == "/swagger/index.html"


def test_app_swagger_index_mentions_title():
    info = default_swagger_info()
    _, _, body = _call(make_app(_aggregator(), info), "/swagger/index.html")
    assert info.title.encode() in body