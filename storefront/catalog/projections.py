"""Row-to-view-model projections.

Each projection is total: it accepts any mapping of source columns, missing or
malformed values included, and never raises. Defaults per field:

- price: non-negative finite number, else 0
- image_url: the category placeholder
- text attributes: stripped string, else None
- year / review count: integer found in the value, else None
- rating: first decimal number found in the value, else None
"""

import math
import re
from typing import Any, Mapping, Optional

from .models import ProductView

CAR_PLACEHOLDER_IMAGE = "https://via.placeholder.com/600x400?text=Vehicle"
PRODUCT_PLACEHOLDER_IMAGE = "https://via.placeholder.com/600x400?text=Product"

DETAIL_SEPARATOR = " • "

_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")
_DIGITS_RE = re.compile(r"\d+")


def to_text(value: Any) -> Optional[str]:
    """Stripped string or None for null/blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_price(value: Any) -> float:
    """Non-negative price, 0 when missing or unparseable."""
    if isinstance(value, bool):
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


def to_int(value: Any) -> Optional[int]:
    """Integer value, or the digits of a scraped string like '(1,234)'."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        digits = "".join(_DIGITS_RE.findall(str(value)))
        return int(digits) if digits else None
    if not math.isfinite(number):
        return None
    return int(number)


def to_rating(value: Any) -> Optional[float]:
    """First number in the value, e.g. 4.5 for '4.5 out of 5'."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) and value else None
    match = _NUMBER_RE.search(str(value))
    if not match:
        return None
    return float(match.group().replace(",", ".")) or None


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key present and not null, e.g. an alias then its column."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def _row_id(row: Mapping[str, Any], id_column: str) -> str:
    return to_text(_first(row, "source_id", id_column)) or ""


def _join_details(*parts: Optional[str]) -> str:
    return DETAIL_SEPARATOR.join(part for part in parts if part)


def project_car(row: Mapping[str, Any]) -> ProductView:
    """Project a coin_afrique_cars row."""
    brand = to_text(row.get("brand"))
    model = to_text(row.get("model"))
    location = to_text(row.get("location"))
    seller_name = to_text(row.get("seller_name"))
    year = to_int(row.get("year"))

    name_parts = [part for part in (brand, model) if part]
    name = " ".join(" ".join(name_parts).split()) if name_parts else "Vehicle listing"

    description = _join_details(
        year and f"Year: {year}",
        location and f"Location: {location}",
        seller_name and f"Seller: {seller_name}",
    )

    return ProductView(
        id=_row_id(row, "coin_afrique_id"),
        name=name,
        description=description or "Vehicle sourced from CoinAfrique listings",
        price=to_price(_first(row, "price", "Price")),
        image_url=to_text(row.get("image_url")) or CAR_PLACEHOLDER_IMAGE,
        category="cars",
        brand=brand,
        model=model,
        location=location,
        seller_name=seller_name,
        year=year,
    )


def project_jumia(row: Mapping[str, Any]) -> ProductView:
    """Project a jumia_products row."""
    brand = to_text(row.get("brand_name"))
    discount = to_text(row.get("discount"))
    rating = to_rating(row.get("reviews_rating"))
    reviews_count = to_int(row.get("reviews_count"))

    description = _join_details(
        brand and f"Brand: {brand}",
        discount and f"Discount: {discount}",
        rating and f"Rating: {rating:g}",
        reviews_count and f"{reviews_count} reviews",
    )

    return ProductView(
        id=_row_id(row, "jumia_product_id"),
        name=to_text(row.get("product_name")) or brand or "Jumia product",
        description=description or "Popular item sourced from Jumia listings",
        price=to_price(_first(row, "price", "Price")),
        image_url=to_text(row.get("image_url")) or PRODUCT_PLACEHOLDER_IMAGE,
        category="jumia",
        brand=brand,
        discount=discount,
        reviews_rating=rating,
        reviews_count=reviews_count,
    )
