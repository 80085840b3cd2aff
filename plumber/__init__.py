"""
Plumber - Flow puzzle solver.

Reads a board file, searches for paths joining every pair of endpoints
so that all cells are filled, and renders the result in the terminal.
"""

__version__ = "0.1.0"
