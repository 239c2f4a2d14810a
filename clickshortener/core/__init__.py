from clickshortener.core.shortcode import generate_shortcode, is_valid_shortcode
from clickshortener.core.allocator import CodeAllocator
from clickshortener.core.resolver import RedirectResolver
from clickshortener.core.catalog import LinkCatalog


__all__ = [
    'generate_shortcode',
    'is_valid_shortcode',
    'CodeAllocator',
    'RedirectResolver',
    'LinkCatalog',
]
