# crudapp/api.py

"""
Request handler and route table for the /api/products endpoints.

`ProductHandler` receives its repository through the constructor; each of its
methods makes the storage call(s) for one route and turns the result into a
response. `build_router` registers those methods path by path.
"""
import logging
from typing import List

from fastapi import APIRouter, Response, status

from .exceptions import ProductNotFoundError
from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductResponse, ProductUpdate

logger = logging.getLogger(__name__)


def _not_found() -> Response:
    # 404 carries no body
    return Response(status_code=status.HTTP_404_NOT_FOUND)


class ProductHandler:
    """Maps each product route to the repository."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def list_products(self):
        """
        Retrieves every stored product.

        - Returns an empty list when nothing is stored.
        """
        products = self.repository.list_all()
        logger.info(f"Retrieved {len(products)} products.")
        return products

    def get_product(self, product_id: int):
        """
        Retrieves a single product by its ID.

        - Returns 404 with an empty body if the product does not exist.
        """
        logger.info(f"Fetching product with ID: {product_id}")
        product = self.repository.find_by_id(product_id)
        if product is None:
            logger.warning(f"Product with ID: {product_id} not found.")
            return _not_found()
        return product

    def create_product(self, product: ProductCreate):
        """
        Creates a new product. The ID is assigned by the storage layer.
        """
        logger.info(f"Creating product: {product.name}")
        created = self.repository.save(Product(**product.model_dump()))
        logger.info(f"Product '{created.name}' (ID: {created.id}) created successfully.")
        return created

    def update_product(self, product_id: int, updated: ProductUpdate):
        """
        Replaces the name, description and price of an existing product.

        - The stored ID is kept whatever the request body contains.
        - Returns 404 with an empty body, and changes nothing, if the product does not exist.
        """
        logger.info(f"Updating product with ID: {product_id}")
        product = self.repository.find_by_id(product_id)
        if product is None:
            logger.warning(f"Product with ID: {product_id} not found for update.")
            return _not_found()

        product.name = updated.name
        product.description = updated.description
        product.price = updated.price
        saved = self.repository.save(product)
        logger.info(f"Product '{saved.name}' (ID: {product_id}) updated successfully.")
        return saved

    def delete_product(self, product_id: int):
        """
        Deletes a product by its ID.

        - Returns 204 with an empty body on success, 404 with an empty body if the product does not exist.
        """
        logger.info(f"Attempting to delete product with ID: {product_id}")
        if not self.repository.exists(product_id):
            logger.warning(f"Product with ID: {product_id} not found for deletion.")
            return _not_found()
        try:
            self.repository.delete_by_id(product_id)
        except ProductNotFoundError:
            # deleted by another request after the existence check
            logger.warning(f"Product with ID: {product_id} was already deleted.")
            return _not_found()
        logger.info(f"Product (ID: {product_id}) deleted successfully.")
        return Response(status_code=status.HTTP_204_NO_CONTENT)


def build_router(handler: ProductHandler) -> APIRouter:
    """
    Registers the handler methods under /api/products, one route per path and method.
    """
    router = APIRouter(prefix="/api/products", tags=["products"])

    router.add_api_route(
        "",
        handler.list_products,
        methods=["GET"],
        response_model=List[ProductResponse],
        summary="List all products",
    )
    router.add_api_route(
        "/{product_id}",
        handler.get_product,
        methods=["GET"],
        response_model=ProductResponse,
        summary="Retrieve a product by ID",
    )
    router.add_api_route(
        "",
        handler.create_product,
        methods=["POST"],
        response_model=ProductResponse,
        status_code=status.HTTP_201_CREATED,
        summary="Create a new product",
    )
    router.add_api_route(
        "/{product_id}",
        handler.update_product,
        methods=["PUT"],
        response_model=ProductResponse,
        summary="Update an existing product",
    )
    router.add_api_route(
        "/{product_id}",
        handler.delete_product,
        methods=["DELETE"],
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        summary="Delete a product by ID",
    )
    return router
