"""
Community resource catalog.
"""

from tether.catalog.resource_catalog import ResourceCatalog

__all__ = ['ResourceCatalog']
