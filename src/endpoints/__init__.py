from src.endpoints.products import router as products_router
from src.endpoints.utils import router as utils_router

list_of_routes = [
    utils_router,
    products_router,
]

__all__ = [
    'list_of_routes',
]
