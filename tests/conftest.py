"""Shared fixtures: a temporary catalog database seeded with both categories."""

import pytest
from sqlalchemy import event

from storefront.database import get_engine, init_db, get_session
from storefront.catalog.models import (
    CarORM, JumiaProductORM, CarRecommendationORM, JumiaRecommendationORM,
)


CARS = [
    dict(coin_afrique_id=1, brand="Toyota", model="Corolla", seller_name="Auto Dakar",
         location="Dakar", price=5_000_000, image_url="https://img.example/1.jpg", year=2015),
    dict(coin_afrique_id=2, brand="Honda", model="Civic", location="Thies", price=None),
    dict(coin_afrique_id=3, brand="Peugeot", model="308", price=3_200_000, year=2012),
    dict(coin_afrique_id=4),
]

JUMIA = [
    dict(jumia_product_id=42, brand_name="Samsung", product_name="Phone X", price=150_000,
         discount="10%", reviews_rating="4.5 out of 5", reviews_count="(12)"),
    dict(jumia_product_id=43, brand_name="Tecno", product_name="Spark 10", price=80_000),
    dict(jumia_product_id=44, brand_name="Samsung", product_name="Galaxy Buds", price=45_000,
         image_url="https://img.example/44.jpg"),
]

# (source, target, support, confidence, lift)
CAR_EDGES = [
    ("1", "2", 0.1, 0.9, 1.5),
    ("1", "3", 0.2, 0.9, 2.0),
    ("1", "99", 0.1, 0.8, 1.2),  # target does not exist
    ("1", "4", None, 0.5, 1.1),
]

JUMIA_EDGES = [
    ("42", "43", 0.3, 0.7, 1.4),
    ("42", "43", 0.2, 0.6, 1.3),  # duplicate edge from upstream
    ("42", "44", 0.1, 0.5, 1.2),
]


def _edges(model, rows):
    return [
        model(product_id=source, recommended_id=target, support=support,
              confidence=confidence, lift=lift)
        for source, target, support, confidence, lift in rows
    ]


@pytest.fixture
async def db_engine(tmp_path):
    """Create an empty catalog database."""
    engine = get_engine(str(tmp_path / "catalog.db"))
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def seeded_engine(db_engine):
    """Catalog database with cars, jumia products and their edges."""
    async with get_session(db_engine) as session:
        session.add_all([CarORM(**row) for row in CARS])
        session.add_all([JumiaProductORM(**row) for row in JUMIA])
        session.add_all(_edges(CarRecommendationORM, CAR_EDGES))
        session.add_all(_edges(JumiaRecommendationORM, JUMIA_EDGES))
    return db_engine


@pytest.fixture
def statements(seeded_engine):
    """SQL statements executed against the seeded engine after this point."""
    executed = []

    def record(conn, cursor, statement, parameters, context, executemany):
        executed.append(statement)

    event.listen(seeded_engine.sync_engine, "before_cursor_execute", record)
    yield executed
    event.remove(seeded_engine.sync_engine, "before_cursor_execute", record)
