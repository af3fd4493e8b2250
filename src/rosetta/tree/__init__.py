from .errors import MalformedTreeError
from .loader import load_tree
from .models import Node

__all__ = [
    "MalformedTreeError",
    "Node",
    "load_tree",
]
