# crudapp/models.py

"""
SQLAlchemy database models for the Product Service.
"""

from sqlalchemy import Column, Float, Integer, String, Text

from .db import Base


class Product(Base):
    """
    SQLAlchemy model for the 'products' table.
    """

    __tablename__ = "products"

    # SQLite would otherwise hand out the id of a deleted last row again
    __table_args__ = {"sqlite_autoincrement": True}

    # Assigned by the database on insert, never by the client.
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String(255))

    description = Column(Text, nullable=True)

    price = Column(Float)

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
