"""Comparisons, masking, indexing, sorting, sampling, products and LAPACK routines over NumPy arrays."""

__version__ = "0.1.0"
__all__ = [
    "blas",
    "comparison",
    "construction",
    "decompositions",
    "indexing",
    "masking",
    "sampling",
    "solvers",
    "sorting",
]