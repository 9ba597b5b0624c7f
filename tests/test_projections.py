"""Tests for row-to-view-model projections."""

import pytest

from storefront.catalog.projections import (
    project_car, project_jumia, to_price, to_int, to_rating,
    CAR_PLACEHOLDER_IMAGE, PRODUCT_PLACEHOLDER_IMAGE,
)

OPTIONAL_ATTRIBUTES = {
    "brand", "model", "color", "storage", "screenSize", "battery", "engine",
    "range", "acceleration", "location", "sellerName", "year", "discount",
    "reviewsRating", "reviewsCount",
}


def test_jumia_example_row():
    """Test the documented jumia example."""
    product = project_jumia({
        "jumia_product_id": 42,
        "product_name": "Phone X",
        "Price": 150000,
        "discount": "10%",
    })

    data = product.model_dump(by_alias=True)
    assert data["id"] == "42"
    assert data["name"] == "Phone X"
    assert data["price"] == 150000
    assert data["discount"] == "10%"
    assert data["category"] == "jumia"
    assert data["description"] == "Discount: 10%"
    assert data["imageUrl"] == PRODUCT_PLACEHOLDER_IMAGE
    for attr in OPTIONAL_ATTRIBUTES - {"discount"}:
        assert data[attr] is None, attr


def test_car_full_row():
    """Test projecting a complete car listing."""
    product = project_car({
        "source_id": 7,
        "brand": "Toyota ",
        "model": " Land  Cruiser",
        "seller_name": "Auto Dakar",
        "location": "Dakar",
        "price": "12500000",
        "image_url": "https://img.example/7.jpg",
        "year": 2018,
    })

    assert product.id == "7"
    assert product.name == "Toyota Land Cruiser"
    assert product.description == "Year: 2018 • Location: Dakar • Seller: Auto Dakar"
    assert product.price == 12500000
    assert product.image_url == "https://img.example/7.jpg"
    assert product.category == "cars"
    assert product.year == 2018
    assert product.seller_name == "Auto Dakar"


def test_car_empty_row_defaults():
    """Test that a car row with nothing but its key degrades to defaults."""
    product = project_car({"source_id": 3})

    assert product.name == "Vehicle listing"
    assert product.description == "Vehicle sourced from CoinAfrique listings"
    assert product.price == 0
    assert product.image_url == CAR_PLACEHOLDER_IMAGE
    assert product.brand is None
    assert product.year is None


def test_jumia_name_falls_back_to_brand():
    """Test jumia name fallbacks."""
    assert project_jumia({"source_id": 1, "brand_name": "Oraimo"}).name == "Oraimo"
    assert project_jumia({"source_id": 1, "product_name": "  "}).name == "Jumia product"


def test_jumia_review_fields_are_parsed():
    """Test scraped rating and review count strings."""
    product = project_jumia({
        "source_id": 9,
        "brand_name": "Samsung",
        "reviews_rating": "4.5 out of 5",
        "reviews_count": "(1,204)",
    })

    assert product.reviews_rating == 4.5
    assert product.reviews_count == 1204
    assert product.description == "Brand: Samsung • Rating: 4.5 • 1204 reviews"


def test_view_model_has_same_keys_for_every_category():
    """Test that both categories serialise the same attribute set."""
    car = project_car({"source_id": 1}).model_dump(by_alias=True)
    jumia = project_jumia({"source_id": 1}).model_dump(by_alias=True)

    assert set(car) == set(jumia)
    assert OPTIONAL_ATTRIBUTES <= set(car)


@pytest.mark.parametrize("value,expected", [
    (None, 0),
    ("", 0),
    ("abc", 0),
    (-5, 0),
    (float("nan"), 0),
    (float("inf"), 0),
    ("1500.5", 1500.5),
    (2000, 2000),
])
def test_to_price(value, expected):
    """Test price normalisation."""
    assert to_price(value) == expected


def test_to_int_and_rating():
    """Test lenient number parsing."""
    assert to_int("2015") == 2015
    assert to_int(2015.0) == 2015
    assert to_int("(12)") == 12
    assert to_int("n/a") is None
    assert to_int("0") == 0
    assert to_int(0) == 0
    assert to_rating("3,8 out of 5") == 3.8
    assert to_rating("unrated") is None
    assert to_rating(4) == 4.0


def test_projection_never_raises_on_odd_values():
    """Test projections tolerate unexpected value types."""
    product = project_car({
        "source_id": "x1",
        "brand": 123,
        "price": object(),
        "year": "circa 2010",
    })

    assert product.brand == "123"
    assert product.price == 0
    assert product.year == 2010


def test_selected_aliases_take_precedence():
    """Test rows from the catalog query, which alias the key and price."""
    product = project_jumia({
        "source_id": 7,
        "jumia_product_id": 99,
        "price": 500,
        "Price": 900,
    })

    assert product.id == "7"
    assert product.price == 500


def test_car_raw_table_row():
    """Test a car row keyed by its table columns."""
    product = project_car({"coin_afrique_id": 15, "brand": "Kia", "Price": "4200000"})

    assert product.id == "15"
    assert product.price == 4200000


def test_missing_key_never_becomes_none_string():
    assert project_car({"brand": "Kia"}).id == ""
    assert project_jumia({}).id == ""


def test_zero_review_count_is_kept():
    """Test an explicit zero is not confused with a missing value."""
    product = project_jumia({"source_id": 1, "reviews_count": "0"})

    assert product.reviews_count == 0
    assert product.model_dump(by_alias=True)["reviewsCount"] == 0
