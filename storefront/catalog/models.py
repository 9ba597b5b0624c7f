"""Catalog table definitions and API view-models."""

from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import Column, String, Float, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


# ============ SQLAlchemy ORM Models ============
# Populated by the scraping/recommendation jobs; read-only for this service.

class CarORM(Base):
    """SQLAlchemy model for coin_afrique_cars table."""
    __tablename__ = "coin_afrique_cars"

    coin_afrique_id = Column(Integer, primary_key=True)
    brand = Column(String)
    model = Column(String)
    seller_name = Column(String)
    location = Column(String)
    price = Column("Price", Float)
    image_url = Column(String)
    year = Column(Integer)


class JumiaProductORM(Base):
    """SQLAlchemy model for jumia_products table."""
    __tablename__ = "jumia_products"

    jumia_product_id = Column(Integer, primary_key=True)
    brand_name = Column(String)
    product_name = Column(String)
    price = Column("Price", Float)
    discount = Column(String)
    reviews_rating = Column(String)
    reviews_count = Column(String)
    image_url = Column(String)


class CarRecommendationORM(Base):
    """SQLAlchemy model for coin_recommendations table."""
    __tablename__ = "coin_recommendations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String, index=True, nullable=False)
    recommended_id = Column(String, nullable=False)
    support = Column(Float)
    confidence = Column(Float)
    lift = Column(Float)


class JumiaRecommendationORM(Base):
    """SQLAlchemy model for jumia_recommendations table."""
    __tablename__ = "jumia_recommendations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String, index=True, nullable=False)
    recommended_id = Column(String, nullable=False)
    support = Column(Float)
    confidence = Column(Float)
    lift = Column(Float)


# ============ Pydantic Models (API) ============

class ProductView(BaseModel):
    """
    Product shape shared by every category.

    All optional attributes are always serialised; a category fills the
    ones meaningful to it and leaves the rest null.
    """
    id: str
    name: str
    description: str
    price: float = Field(0, ge=0)
    image_url: str
    category: str

    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    storage: Optional[str] = None
    screen_size: Optional[str] = None
    battery: Optional[str] = None
    engine: Optional[str] = None
    range: Optional[str] = None
    acceleration: Optional[str] = None
    location: Optional[str] = None
    seller_name: Optional[str] = None
    year: Optional[int] = None
    discount: Optional[str] = None
    reviews_rating: Optional[float] = None
    reviews_count: Optional[int] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RecommendationMeta(BaseModel):
    """Association-rule statistics explaining a recommendation."""
    support: Optional[float] = None
    confidence: Optional[float] = None
    lift: Optional[float] = None


class RecommendationView(ProductView):
    """Product view with the edge statistics that produced it."""
    recommendation_meta: RecommendationMeta = Field(default_factory=RecommendationMeta)
