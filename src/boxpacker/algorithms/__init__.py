"""Packing algorithms: ordering, first-fit placement and local search."""

from .ffd_packer import FirstFitDecreasingPacker
from .local_search import LocalSearchOptimizer, LocalSearchResult
from .ordering import ORDERING_STRATEGIES, get_ordering_strategy
from .solver import PackingSolution, area_lower_bound, solve

__all__ = [
    "FirstFitDecreasingPacker",
    "LocalSearchOptimizer",
    "LocalSearchResult",
    "ORDERING_STRATEGIES",
    "PackingSolution",
    "area_lower_bound",
    "get_ordering_strategy",
    "solve",
]
