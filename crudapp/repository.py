# crudapp/repository.py

"""
Data-access layer for the Product Service.

`ProductRepository` is the storage contract the request handler depends on.
Two implementations are provided:

- `SqlAlchemyProductRepository` persists products through SQLAlchemy, opening
  one session (and one implicit transaction) per call.
- `InMemoryProductRepository` keeps products in a dictionary; useful for tests
  and for running the API without a database.

Objects returned by either implementation are detached copies: changing them
does not touch the store until they are passed back to `save`.
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import ProductNotFoundError
from .models import Product

logger = logging.getLogger(__name__)


class ProductRepository(ABC):
    """Storage contract for `Product` records."""

    @abstractmethod
    def list_all(self) -> List[Product]:
        """Return every stored product, in id order."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> Optional[Product]:
        """Return the product with the given id, or None if it is not stored."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """
        Insert the product when its id is unset, otherwise overwrite the
        stored record with that id. Returns the persisted product.

        An explicit id that is not stored is inserted under that id. The
        in-memory store moves its counter past it; a database sequence
        (PostgreSQL SERIAL) is not advanced, so a later generated id can
        collide with it. Handlers only pass ids of stored records.
        """

    @abstractmethod
    def exists(self, product_id: int) -> bool:
        """Return True if a product with the given id is stored."""

    @abstractmethod
    def delete_by_id(self, product_id: int) -> None:
        """Remove the product. Raises ProductNotFoundError if it is not stored."""


class SqlAlchemyProductRepository(ProductRepository):
    """`ProductRepository` backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_all(self) -> List[Product]:
        with self._session_factory() as session:
            return session.query(Product).order_by(Product.id).all()

    def find_by_id(self, product_id: int) -> Optional[Product]:
        with self._session_factory() as session:
            return session.query(Product).filter(Product.id == product_id).first()

    def save(self, product: Product) -> Product:
        with self._session_factory() as session:
            try:
                if product.id is None:
                    session.add(product)
                else:
                    product = session.merge(product)
                session.commit()
                session.refresh(product)
                return product
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Error saving product {product.id}: {e}", exc_info=True)
                raise

    def exists(self, product_id: int) -> bool:
        with self._session_factory() as session:
            return (
                session.query(Product.id).filter(Product.id == product_id).first()
                is not None
            )

    def delete_by_id(self, product_id: int) -> None:
        with self._session_factory() as session:
            product = session.query(Product).filter(Product.id == product_id).first()
            if product is None:
                raise ProductNotFoundError(product_id)
            try:
                session.delete(product)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
                raise


def _copy(product: Product) -> Product:
    return Product(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
    )


class InMemoryProductRepository(ProductRepository):
    """`ProductRepository` holding products in process memory."""

    def __init__(self):
        self._products: Dict[int, Product] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def list_all(self) -> List[Product]:
        with self._lock:
            return [_copy(self._products[key]) for key in sorted(self._products)]

    def find_by_id(self, product_id: int) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            return _copy(product) if product is not None else None

    def save(self, product: Product) -> Product:
        stored = _copy(product)
        with self._lock:
            if stored.id is None:
                stored.id = self._next_id
            self._next_id = max(self._next_id, stored.id + 1)
            self._products[stored.id] = stored
            return _copy(stored)

    def exists(self, product_id: int) -> bool:
        with self._lock:
            return product_id in self._products

    def delete_by_id(self, product_id: int) -> None:
        with self._lock:
            if product_id not in self._products:
                raise ProductNotFoundError(product_id)
            del self._products[product_id]
