from catalog_api.models.product import Product
from catalog_api.models.term import Term, TermLanguage, SUPPORTED_LANGUAGES

__all__ = [
    "Product",
    "Term",
    "TermLanguage",
    "SUPPORTED_LANGUAGES",
]
