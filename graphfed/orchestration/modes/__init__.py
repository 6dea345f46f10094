"""Merge policy implementations.

Modes:
- parallel_merge: every backend at once, then merge
- sequential_narrowing: backend by backend, narrowing and short-circuiting
"""

__all__: list[str] = []
