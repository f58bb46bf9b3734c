from .base import CatalogProvider
from .catalog import BundledCatalogProvider


def get_catalog_providers(catalog_path=None):
    return [BundledCatalogProvider(catalog_path=catalog_path)]


__all__ = [
    "CatalogProvider",
    "BundledCatalogProvider",
    "get_catalog_providers",
]
