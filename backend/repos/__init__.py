"""
Repository layer for dynamic forms.

All list API access lives here and ONLY here.
"""

from backend.repos.list_repo import ListRepo

__all__ = [
    "ListRepo",
]
