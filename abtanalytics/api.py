"""HTTP handlers and the WSGI application serving the aggregates."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any
from urllib.parse import parse_qs

from .aggregator import Aggregator
from .docs import SwaggerInfo, default_swagger_info, swagger_spec

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_JSON_ESCAPE_RE = re.compile("[<>&\u2028\u2029]")

_INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
<h1>{title}</h1>
<p>{description}</p>
<p><a href="doc.json">doc.json</a></p>
</body>
</html>
"""

Headers = list[tuple[str, str]]
StartResponse = Callable[[str, Headers], Any]


def parse_query_int(value: str, default: int) -> int:
    """Return ``value`` as a positive integer, or ``default`` if it is not one."""
    if not _INT_RE.fullmatch(value or ""):
        return default
    number = int(value)
    if number > _INT64_MAX or number < _INT64_MIN or number <= 0:
        return default
    return number


def _dicts(items: Iterable[Any]) -> list[dict[str, Any]] | None:
    result = [item.to_dict() for item in items]
    # An empty ranking is reported as null, as the API has always done.
    return result or None


class Handler:
    """Turns aggregator queries into JSON-ready values."""

    def __init__(self, aggregator: Aggregator) -> None:
        self.aggregator = aggregator

    def country_summary(self, query: Mapping[str, str]) -> list[dict[str, Any]]:
        """Countries by revenue, paged by ``page`` and ``size``, with top products."""
        page = parse_query_int(query.get("page", ""), 1)
        size = parse_query_int(query.get("size", ""), 20)
        product_limit = parse_query_int(query.get("products", ""), 10)
        offset = (page - 1) * size
        summaries = self.aggregator.country_revenue_summary_paginated(
            offset, size, product_limit
        )
        return [summary.to_dict() for summary in summaries]

    def top_products(self) -> list[dict[str, Any]] | None:
        """The 20 best-selling products by units."""
        return _dicts(self.aggregator.top_products(20))

    def monthly_sales(self) -> list[dict[str, Any]] | None:
        """Units sold per month, highest first."""
        return _dicts(self.aggregator.monthly_sales())

    def top_regions(self) -> list[dict[str, Any]] | None:
        """The 30 regions with the highest revenue."""
        return _dicts(self.aggregator.top_regions(30))


def _encode_json(value: Any) -> bytes:
    text = json.dumps(value, ensure_ascii=False)
    text = _JSON_ESCAPE_RE.sub(lambda m: _JSON_ESCAPES[m.group()], text)
    return (text + "\n").encode("utf-8")


def _first_values(query_string: str) -> dict[str, str]:
    parsed = parse_qs(query_string, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


def _respond(
    start_response: StartResponse, status: str, headers: Headers, body: bytes
) -> list[bytes]:
    start_response(status, [*headers, ("Content-Length", str(len(body)))])
    return [body]


def _not_found(start_response: StartResponse) -> list[bytes]:
    return _respond(
        start_response,
        "404 Not Found",
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
        ],
        b"404 page not found\n",
    )


def _redirect(start_response: StartResponse, location: str) -> list[bytes]:
    return _respond(
        start_response,
        "301 Moved Permanently",
        [("Location", location), ("Content-Type", "text/html; charset=utf-8")],
        f'<a href="{location}">Moved Permanently</a>.\n\n'.encode("utf-8"),
    )


def make_app(
    aggregator: Aggregator, swagger_info: SwaggerInfo | None = None
) -> Callable[[dict[str, Any], StartResponse], list[bytes]]:
    """Build the WSGI application exposing the API and its documentation."""
    handler = Handler(aggregator)
    info = swagger_info if swagger_info is not None else default_swagger_info()

    endpoints: dict[str, Callable[[Mapping[str, str]], Any]] = {
        "/api/revenue/country/summary": handler.country_summary,
        "/api/products/top": lambda _query: handler.top_products(),
        "/api/sales/monthly": lambda _query: handler.monthly_sales(),
        "/api/regions/top": lambda _query: handler.top_regions(),
    }

    def swagger(path: str, start_response: StartResponse) -> list[bytes]:
        resource = path[len("/swagger/"):]
        if resource == "":
            return _redirect(start_response, "/swagger/index.html")
        if resource == "doc.json":
            body = json.dumps(swagger_spec(info), indent=4).encode("utf-8")
            return _respond(
                start_response,
                "200 OK",
                [("Content-Type", "application/json; charset=utf-8")],
                body,
            )
        if resource == "index.html":
            body = _INDEX_HTML.format(
                title=info.title or "API", description=info.description
            ).encode("utf-8")
            return _respond(
                start_response,
                "200 OK",
                [("Content-Type", "text/html; charset=utf-8")],
                body,
            )
        return _not_found(start_response)

    def app(environ: dict[str, Any], start_response: StartResponse) -> list[bytes]:
        path = environ.get("PATH_INFO") or "/"
        endpoint = endpoints.get(path)
        if endpoint is not None:
            query = _first_values(environ.get("QUERY_STRING", ""))
            return _respond(
                start_response,
                "200 OK",
                [
                    ("Access-Control-Allow-Origin", "*"),
                    ("Content-Type", "application/json"),
                ],
                _encode_json(endpoint(query)),
            )
        if path == "/swagger":
            return _redirect(start_response, "/swagger/")
        if path.startswith("/swagger/"):
            return swagger(path, start_response)
        return _not_found(start_response)

    return app