from sqlalchemy import Column, ForeignKey, Integer, String, Text
from shared.config.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(50), primary_key=True)  # slug, e.g. "ao-nam"
    name = Column(String(100), nullable=False)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    price = Column(Integer, nullable=False)  # smallest currency unit
    image = Column(String(500), nullable=True)
    category = Column(String(50), ForeignKey("categories.id"), nullable=True)
    description = Column(Text, nullable=True)
