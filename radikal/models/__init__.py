"""Database models for the blog backend."""

from .blog_post import BlogPost
from .translation_cache import TranslationCacheEntry

__all__ = ['BlogPost', 'TranslationCacheEntry']
