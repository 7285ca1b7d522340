"""In-memory aggregation of streamed transactions."""

from __future__ import annotations

import datetime as dt
import heapq
from dataclasses import replace
from operator import attrgetter

from .models import (
    CountryRevenue,
    CountrySummary,
    MonthlySales,
    ProductRevenueSummary,
    ProductStats,
    RegionStats,
    Transaction,
)


def _month_key(day: dt.date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def _require_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} must not be negative, got {value}")


class Aggregator:
    """Keeps running totals by country, product, month and region."""

    def __init__(self) -> None:
        self._country_revenue: dict[str, dict[str, CountryRevenue]] = {}
        self._product_stats: dict[str, ProductStats] = {}
        self._monthly_sales: dict[str, int] = {}
        self._region_stats: dict[str, RegionStats] = {}

    def process(self, transaction: Transaction) -> None:
        """Fold one transaction into the aggregates."""
        t = transaction

        products = self._country_revenue.setdefault(t.country, {})
        rec = products.get(t.product_name)
        if rec is None:
            rec = products[t.product_name] = CountryRevenue(
                country=t.country, product_name=t.product_name
            )
        rec.total_revenue += t.total_price
        rec.transaction_count += 1

        stats = self._product_stats.get(t.product_name)
        if stats is None:
            stats = self._product_stats[t.product_name] = ProductStats(
                product_name=t.product_name, stock_quantity=t.stock_quantity
            )
        stats.total_quantity += t.quantity

        month = _month_key(t.transaction_date)
        self._monthly_sales[month] = self._monthly_sales.get(month, 0) + t.quantity

        region = self._region_stats.get(t.region)
        if region is None:
            region = self._region_stats[t.region] = RegionStats(region=t.region)
        region.total_revenue += t.total_price
        region.items_sold += t.quantity

    @staticmethod
    def _summarise(
        country: str, products: dict[str, CountryRevenue], limit_products: int
    ) -> CountrySummary:
        total = 0.0
        for rec in products.values():
            total += rec.total_revenue
        top = heapq.nlargest(
            limit_products, products.values(), key=attrgetter("total_revenue")
        )
        return CountrySummary(
            country=country,
            country_total_revenue=total,
            products=[
                ProductRevenueSummary(
                    product_name=rec.product_name,
                    total_revenue=rec.total_revenue,
                    transaction_count=rec.transaction_count,
                )
                for rec in top
            ],
        )

    def country_revenue_summary_paginated(
        self, offset: int, limit_countries: int, limit_products: int
    ) -> list[CountrySummary]:
        """Countries by revenue, descending, windowed by offset and limit.

        Each country carries at most ``limit_products`` products, best first.
        """
        _require_non_negative(offset=offset, limit_countries=limit_countries)
        keep = offset + limit_countries
        summaries = (
            self._summarise(country, products, limit_products)
            for country, products in self._country_revenue.items()
        )
        ranked = heapq.nlargest(
            keep, summaries, key=attrgetter("country_total_revenue")
        )
        return ranked[offset:keep]

    def country_revenue_summary(self, limit_products: int) -> list[CountrySummary]:
        """All countries by revenue, each capped at ``limit_products`` products."""
        return self.country_revenue_summary_paginated(
            0, len(self._country_revenue), limit_products
        )

    def top_products(self, n: int) -> list[ProductStats]:
        """The ``n`` products with the most units sold."""
        _require_non_negative(n=n)
        ranked = sorted(
            self._product_stats.values(),
            key=attrgetter("total_quantity"),
            reverse=True,
        )
        return [replace(stats) for stats in ranked[:n]]

    def monthly_sales(self) -> list[MonthlySales]:
        """Units sold per month, highest volume first."""
        sales = (
            MonthlySales(month=month, volume=volume)
            for month, volume in self._monthly_sales.items()
        )
        return sorted(sales, key=attrgetter("volume"), reverse=True)

    def top_regions(self, n: int) -> list[RegionStats]:
        """The ``n`` regions with the highest revenue."""
        _require_non_negative(n=n)
        ranked = sorted(
            self._region_stats.values(),
            key=attrgetter("total_revenue"),
            reverse=True,
        )
        return [replace(stats) for stats in ranked[:n]]