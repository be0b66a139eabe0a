"""Table sources for tabledoc."""

from tabledoc.io.csv_loader import load_csv

__all__ = ["load_csv"]
