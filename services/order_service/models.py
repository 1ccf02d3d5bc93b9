from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from shared.config.database import Base

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(100), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    customer_address = Column(Text, nullable=False)
    note = Column(Text, default="")
    # Line items are a snapshot from the client cart, not linked to products
    items = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    total = Column(Integer, nullable=False)  # trusted from the client
    order_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), default="pending")  # only 'pending' is ever written
    created_at = Column(DateTime(timezone=True), server_default=func.now())
