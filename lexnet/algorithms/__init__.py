from .traversal import Traversal, walk, walk_many

__all__ = ["Traversal", "walk", "walk_many"]
