"""
Product model
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric
from catalog_api.database import Base
from catalog_api.models.base import UUIDPrimaryKeyMixin, TimestampMixin


class Product(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Sellable inventory item, addressed by its article number"""
    __tablename__ = "products"

    artical_no = Column(String, nullable=False, unique=True, index=True)
    product_service = Column(String(255), nullable=False)
    in_price = Column(Numeric(10, 2), nullable=False, default=0)
    price = Column(Numeric(10, 2), nullable=False)
    unit = Column(String(50), nullable=False)  # pcs, kg, hour, etc.
    in_stock = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=True)

    # Visibility flag, not a deletion marker
    is_active = Column(Boolean, nullable=False, default=True)
