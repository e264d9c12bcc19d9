"""
Catalog Module - posts and districts lookup lists.
"""

from .models import District, Post
from .router import router

__all__ = ["District", "Post", "router"]
