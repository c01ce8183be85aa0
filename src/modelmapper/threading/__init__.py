"""
Some threading related utilities.
"""
from .thread_local import ThreadLocalStack

__all__ = [
    "ThreadLocalStack"
]
