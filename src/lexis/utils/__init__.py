"""
Utility modules for poly-lexis
"""

from .tree_codec import flatten, unflatten, is_nested
from .namespace_store import NamespaceStore, sort_keys
from .plural import extract_plural_base_keys
from .validators import InputValidator
from .retry import retry_async
from .rate_limiter import RateLimiter

__all__ = [
    'flatten', 'unflatten', 'is_nested', 'NamespaceStore', 'sort_keys',
    'extract_plural_base_keys', 'InputValidator', 'retry_async', 'RateLimiter',
]
