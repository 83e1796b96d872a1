"""Shared combinatorics and progress accounting."""

from subsel.core.binomial import binomial
from subsel.core.progress import Progress

__all__ = ["binomial", "Progress"]
