"""Row-based standard-cell placement with wirelength-driven improvement."""

__version__ = "0.1.0"
__all__ = ["model", "dump", "placers", "annealing"]