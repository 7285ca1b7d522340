"""Streaming reader for the transactions CSV file."""

from __future__ import annotations

import csv
import datetime as dt
import os
import re
from collections.abc import Callable, Sequence

from .models import ZERO_DATE, Transaction

_FIELD_COUNT = 12
_INT_RE = re.compile(r"[+-]?[0-9]+")
_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


class LoadError(Exception):
    """Raised when the transactions file cannot be read."""


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _parse_int(text: str) -> int:
    return int(text) if _INT_RE.fullmatch(text) else 0


def _parse_date(text: str) -> dt.date:
    match = _DATE_RE.fullmatch(text)
    if match is None:
        return ZERO_DATE
    try:
        return dt.date(*(int(part) for part in match.groups()))
    except ValueError:
        return ZERO_DATE


def parse_row(row: Sequence[str]) -> Transaction:
    """Build a transaction from one CSV record.

    Unparsable numbers become zero and unparsable dates the zero date.
    """
    if len(row) < _FIELD_COUNT:
        raise LoadError(
            f"record has {len(row)} fields, expected at least {_FIELD_COUNT}"
        )
    price = _parse_float(row[8])
    quantity = _parse_int(row[9])
    return Transaction(
        transaction_id=row[0],
        transaction_date=_parse_date(row[1]),
        user_id=row[2],
        country=row[3],
        region=row[4],
        product_id=row[5],
        product_name=row[6],
        category=row[7],
        price=price,
        quantity=quantity,
        total_price=price * quantity,
        stock_quantity=_parse_int(row[10]),
        added_date=_parse_date(row[11]),
    )


def load_transactions(
    path: str | os.PathLike[str], process: Callable[[Transaction], None]
) -> None:
    """Read the CSV at ``path`` and pass each transaction to ``process``.

    The header row is skipped; rows are never held in memory together.
    """
    try:
        handle = open(path, newline="", encoding="utf-8", errors="replace")
    except OSError as exc:
        raise LoadError(f"open csv: {exc}") from exc

    with handle:
        reader = csv.reader(handle, strict=True)
        records = (row for row in reader if row)
        try:
            header = next(records)
        except StopIteration:
            raise LoadError("read header: EOF") from None
        except csv.Error as exc:
            raise LoadError(f"read header: {exc}") from exc

        width = len(header)
        while True:
            try:
                row = next(records)
            except StopIteration:
                break
            except csv.Error as exc:
                raise LoadError(f"parse csv: {exc}") from exc
            if len(row) != width:
                raise LoadError(
                    f"parse csv: record on line {reader.line_num}: "
                    "wrong number of fields"
                )
            process(parse_row(row))