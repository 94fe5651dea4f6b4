"""
points.py - Rewards points calculator.

Seven independent, additive rules:
    retailer_name       -> one point per character in the retailer name
    round_dollar_total  -> 50 if the total has no cents
    quarter_multiple    -> 25 if the total is a multiple of 0.25
    item_pairs          -> 5 for every two items
    item_description    -> ceil(price * 0.2) per item whose trimmed
                           description length is a multiple of 3
    odd_purchase_day    -> 6 if the purchase day of month is odd
    afternoon_purchase  -> 10 if purchased at or after 14:00 and before 16:00

Design principles:
    - Pure functions, no I/O, no shared state
    - Malformed fields never fail the request; the affected rule scores 0
    - No rule contributes a negative amount
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Optional

from logging_config import get_logger
from models import Item, Receipt

logger = get_logger(__name__)

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
QUARTER = 0.25
POINTS_PER_ITEM_PAIR = 5
DESCRIPTION_LENGTH_DIVISOR = 3
DESCRIPTION_PRICE_MULTIPLIER = 0.2
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START_HOUR = 14
AFTERNOON_END_HOUR = 16

_AMOUNT_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_TIME_PATTERN = re.compile(r"(?P<hour>\d{1,2}):(?P<minute>\d{2})", re.ASCII)

RULE_NAMES: tuple[str, ...] = (
    "retailer_name",
    "round_dollar_total",
    "quarter_multiple",
    "item_pairs",
    "item_description",
    "odd_purchase_day",
    "afternoon_purchase",
)


def parse_amount(value: str, field: str = "amount") -> Optional[float]:
    """Parse a decimal currency string, returning None when it is unusable.

    Only plain ASCII decimal notation is accepted: no surrounding whitespace,
    no digit-group underscores, no inf/nan.
    """
    if not isinstance(value, str) or not _AMOUNT_PATTERN.fullmatch(value):
        logger.warning("points | parse_failed | field=%s | raw=%r | fallback=0", field, value)
        return None

    try:
        amount = float(value)
    except ValueError:
        logger.warning("points | parse_failed | field=%s | raw=%r | fallback=0", field, value)
        return None

    if not math.isfinite(amount):
        logger.warning("points | non_finite | field=%s | raw=%r | fallback=0", field, value)
        return None
    return amount


def parse_purchase_date(value: str) -> Optional[date]:
    """Parse a strict YYYY-MM-DD date."""
    if not _DATE_PATTERN.fullmatch(value or ""):
        logger.warning("points | parse_failed | field=purchaseDate | raw=%r", value)
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        logger.warning("points | invalid_date | field=purchaseDate | raw=%r", value)
        return None


def parse_purchase_hour(value: str) -> Optional[int]:
    """Return the hour of a 24-hour HH:MM time, or None if it does not parse."""
    match = _TIME_PATTERN.fullmatch(value or "")
    if match is None:
        logger.warning("points | parse_failed | field=purchaseTime | raw=%r", value)
        return None

    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    if hour > 23 or minute > 59:
        logger.warning("points | out_of_range | field=purchaseTime | raw=%r", value)
        return None
    return hour


def retailer_name_points(retailer: str) -> int:
    # Counts every character, spaces and punctuation included.
    return len(retailer)


def round_dollar_points(total: Optional[float]) -> int:
    if total is None:
        return 0
    return ROUND_DOLLAR_POINTS if total.is_integer() else 0


def quarter_multiple_points(total: Optional[float]) -> int:
    if total is None:
        return 0
    return QUARTER_MULTIPLE_POINTS if math.fmod(total, QUARTER) == 0 else 0


def item_pair_points(items: tuple[Item, ...]) -> int:
    return POINTS_PER_ITEM_PAIR * (len(items) // 2)


def item_description_points(item: Item) -> int:
    """Score one item: ceil(price * 0.2) when the trimmed description length is a multiple of 3."""
    if len(item.short_description.strip()) % DESCRIPTION_LENGTH_DIVISOR != 0:
        return 0

    price = parse_amount(item.price, field="price")
    if price is None:
        return 0
    return max(0, math.ceil(price * DESCRIPTION_PRICE_MULTIPLIER))


def odd_day_points(purchase_date: str) -> int:
    parsed = parse_purchase_date(purchase_date)
    if parsed is None:
        return 0
    return ODD_DAY_POINTS if parsed.day % 2 == 1 else 0


def afternoon_points(purchase_time: str) -> int:
    hour = parse_purchase_hour(purchase_time)
    if hour is None:
        return 0
    return AFTERNOON_POINTS if AFTERNOON_START_HOUR <= hour < AFTERNOON_END_HOUR else 0


def points_breakdown(receipt: Receipt) -> dict[str, int]:
    """Return each rule's contribution, keyed by rule name in RULE_NAMES order."""
    total = parse_amount(receipt.total, field="total")

    breakdown = {
        "retailer_name": retailer_name_points(receipt.retailer),
        "round_dollar_total": round_dollar_points(total),
        "quarter_multiple": quarter_multiple_points(total),
        "item_pairs": item_pair_points(receipt.items),
        "item_description": sum(item_description_points(item) for item in receipt.items),
        "odd_purchase_day": odd_day_points(receipt.purchase_date),
        "afternoon_purchase": afternoon_points(receipt.purchase_time),
    }
    logger.debug("points_breakdown | retailer=%r | breakdown=%s", receipt.retailer, breakdown)
    return breakdown


def calculate_points(receipt: Receipt) -> int:
    """Total rewards points for a receipt."""
    return sum(points_breakdown(receipt).values())
