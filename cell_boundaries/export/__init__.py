"""I/O package for the cell growth simulation."""

from .csv_writer import CSVWriter
from .reporter import Reporter

__all__ = ['CSVWriter', 'Reporter']
