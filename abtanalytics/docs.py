"""OpenAPI (Swagger 2.0) description of the analytics API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SwaggerInfo:
    """Metadata placed into the generated specification."""

    version: str = ""
    host: str = ""
    base_path: str = ""
    schemes: list[str] = field(default_factory=list)
    title: str = ""
    description: str = ""
    info_instance_name: str = "swagger"


def default_swagger_info() -> SwaggerInfo:
    """Metadata the server publishes by default."""
    return SwaggerInfo(
        title="ABT Analytics API",
        description="API documentation for ABT Analytics",
        version="1.0",
        host="localhost:8080",
        base_path="/",
        schemes=["http"],
    )


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/definitions/response.{name}"}


def _operation(
    summary: str,
    description: str,
    tag: str,
    item: str,
    parameters: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    op: dict[str, Any] = {
        "description": description,
        "consumes": ["application/json"],
        "produces": ["application/json"],
        "tags": [tag],
        "summary": summary,
    }
    if parameters:
        op["parameters"] = parameters
    op["responses"] = {
        "200": {
            "description": "OK",
            "schema": {"type": "array", "items": _ref(item)},
        }
    }
    return {"get": op}


def _query_int(name: str, description: str) -> dict[str, str]:
    return {"type": "integer", "description": description, "name": name, "in": "query"}


def _object(**properties: dict[str, Any]) -> dict[str, Any]:
    return {"type": "object", "properties": properties}


_STRING = {"type": "string"}
_NUMBER = {"type": "number"}
_INTEGER = {"type": "integer"}


def swagger_spec(info: SwaggerInfo) -> dict[str, Any]:
    """Build the specification document for ``info``."""
    return {
        "schemes": list(info.schemes),
        "swagger": "2.0",
        "info": {
            "description": info.description,
            "title": info.title,
            "contact": {},
            "version": info.version,
        },
        "host": info.host,
        "basePath": info.base_path,
        "paths": {
            "/api/products/top": _operation(
                "Get top products globally",
                "Returns a fixed list of top 20 products globally",
                "products",
                "ProductStats",
            ),
            "/api/regions/top": _operation(
                "Get top sales regions",
                "Returns a list of top 30 sales regions",
                "regions",
                "RegionStats",
            ),
            "/api/revenue/country/summary": _operation(
                "Get country revenue summary",
                "Returns a paginated list of countries with revenue & top products",
                "revenue",
                "CountrySummary",
                [
                    _query_int("page", "Page number"),
                    _query_int("size", "Page size"),
                    _query_int("products", "Number of top products per country"),
                ],
            ),
            "/api/sales/monthly": _operation(
                "Get monthly sales data",
                "Returns aggregated monthly sales data",
                "sales",
                "MonthlySales",
            ),
        },
        "definitions": {
            "response.CountrySummary": _object(
                country=dict(_STRING),
                country_total_revenue=dict(_NUMBER),
                products={"type": "array", "items": _ref("ProductRevenueSummary")},
            ),
            "response.MonthlySales": _object(
                month=dict(_STRING),
                volume=dict(_INTEGER),
            ),
            "response.ProductRevenueSummary": _object(
                product_name=dict(_STRING),
                total_revenue=dict(_NUMBER),
                transaction_count=dict(_INTEGER),
            ),
            "response.ProductStats": _object(
                product_name=dict(_STRING),
                stock_quantity=dict(_INTEGER),
                total_quantity=dict(_INTEGER),
            ),
            "response.RegionStats": _object(
                items_sold=dict(_INTEGER),
                region=dict(_STRING),
                total_revenue=dict(_NUMBER),
            ),
        },
    }