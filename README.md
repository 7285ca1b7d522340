# abtanalytics

abtanalytics reads a CSV file of sales transactions one row at a time. It keeps only
running totals in memory. From those totals it answers these questions:

- revenue per country, with each country's top products by revenue (paginated)
- the top products by quantity sold
- sales volume per month
- the top regions by revenue

It serves the answers as a small JSON HTTP API (a WSGI application) with a
Swagger 2.0 description. The package uses only the standard library.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Running the server

```
abtanalytics
```

The command loads the transactions file and then serves the API with the standard
library's `wsgiref` server until interrupted. Options:

| Option | Default | Meaning |
|--------|---------|---------|
| `--data PATH` | `data/transactions.csv` | the transactions CSV to load |
| `--host ADDR` | all interfaces | address to listen on |
| `--port N` | `8080` | port to listen on |

If the file cannot be loaded, or the server cannot bind its address, the error is
logged and the command exits with status 1.

### CSV layout

The first non-empty line is a header and is skipped. Every following row must have as
many fields as the header, and at least 12. The columns, in order, are:

| # | column |
|---|--------|
| 0 | transaction id |
| 1 | transaction date (`YYYY-MM-DD`) |
| 2 | user id |
| 3 | country |
| 4 | region |
| 5 | product id |
| 6 | product name |
| 7 | category |
| 8 | price |
| 9 | quantity |
| 10 | stock quantity |
| 11 | added date (`YYYY-MM-DD`) |

Each row's total price is `price × quantity`. A number that cannot be parsed counts as
zero. A date that cannot be parsed becomes `0001-01-01`.

## Endpoints

| Path | Result |
|------|--------|
| `GET /api/revenue/country/summary?page=&size=&products=` | Countries ordered by total revenue, each with its top products by revenue. Defaults: page 1, 20 countries per page, 10 products per country. Values that are missing or not positive integers fall back to the defaults. |
| `GET /api/products/top` | The 20 products with the highest total quantity sold. |
| `GET /api/sales/monthly` | Sales volume per `YYYY-MM`, highest first. |
| `GET /api/regions/top` | The 30 regions with the highest revenue. |
| `GET /swagger/doc.json` | The Swagger 2.0 specification. |
| `GET /swagger/index.html` | A short HTML page with the API's title and a link to `doc.json`. |

`/swagger` and `/swagger/` redirect to `/swagger/index.html`. Any other path answers
404.

API responses are JSON and carry `Access-Control-Allow-Origin: *`. When there is no
data, the product, monthly and region endpoints return `null`, and the country summary
returns `[]`.

## Using the library

```python
from datetime import date

from abtanalytics.aggregator import Aggregator
from abtanalytics.loader import load_transactions
from abtanalytics.models import Transaction

agg = Aggregator()
load_transactions("data/transactions.csv", agg.process)

agg.process(Transaction(country="US", product_name="Gadget", region="NY",
                        quantity=10, total_price=500.0, stock_quantity=100,
                        transaction_date=date(2025, 2, 10)))

for summary in agg.country_revenue_summary_paginated(0, 5, 3):
    print(summary.to_dict())

print([s.to_dict() for s in agg.country_revenue_summary(3)])
print([p.to_dict() for p in agg.top_products(20)])
print([m.to_dict() for m in agg.monthly_sales()])
print([r.to_dict() for r in agg.top_regions(30)])
```

`Aggregator` raises `ValueError` if an offset, a country limit or `n` is negative.

`abtanalytics.loader.load_transactions` raises `LoadError` in these cases:

- the file cannot be opened
- the header cannot be read, or the file is empty
- a row is malformed CSV or has the wrong number of fields

`abtanalytics.loader.parse_row` turns a single record into a `Transaction`. It raises
`LoadError` if the record has fewer than 12 fields.

To load a file into a new aggregator, use `abtanalytics.cli.init_aggregator`. To serve
the API from your own WSGI server, build the application with
`abtanalytics.api.make_app(aggregator, swagger_info)`. `swagger_info` is optional and
defaults to `abtanalytics.docs.default_swagger_info()`. `abtanalytics.api.Handler`
gives the JSON-ready values without HTTP. `abtanalytics.docs.swagger_spec` builds the
specification as a dictionary.

## What it does not do

- `/swagger/index.html` is a plain page, not an interactive API explorer. Point such a
  tool at `/swagger/doc.json` if you need one.
- Data is loaded once at start-up and held in memory. Nothing is stored or reloaded
  while the server runs.