# crudapp/exceptions.py

"""Product storage exceptions."""


class ProductNotFoundError(Exception):
    """No product is stored under the requested id."""

    def __init__(self, product_id: int):
        super().__init__(f"Product with ID: {product_id} not found")
        self.product_id = product_id
