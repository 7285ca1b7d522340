"""Transaction records and the aggregate shapes served by the API."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, field
from typing import Any

ZERO_DATE = dt.date(1, 1, 1)


@dataclass
class Transaction:
    """One sale as read from the transactions file."""

    transaction_id: str = ""
    transaction_date: dt.date = ZERO_DATE
    user_id: str = ""
    country: str = ""
    region: str = ""
    product_id: str = ""
    product_name: str = ""
    category: str = ""
    price: float = 0.0
    quantity: int = 0
    total_price: float = 0.0
    stock_quantity: int = 0
    added_date: dt.date = ZERO_DATE


@dataclass
class ProductRevenueSummary:
    """Revenue of one product within a country."""

    product_name: str = ""
    total_revenue: float = 0.0
    transaction_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CountrySummary:
    """Total revenue of a country together with its best-selling products."""

    country: str = ""
    country_total_revenue: float = 0.0
    products: list[ProductRevenueSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CountryRevenue:
    """Running revenue for a country and product pair."""

    country: str = ""
    product_name: str = ""
    total_revenue: float = 0.0
    transaction_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ProductStats:
    """Units sold of a product and its stock level."""

    product_name: str = ""
    total_quantity: int = 0
    stock_quantity: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MonthlySales:
    """Units sold in one calendar month, keyed as YYYY-MM."""

    month: str = ""
    volume: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RegionStats:
    """Revenue and units sold in one region."""

    region: str = ""
    total_revenue: float = 0.0
    items_sold: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)