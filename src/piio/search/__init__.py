"""Digit search."""

from piio.search.searcher import SEARCH_WINDOW, prefix_function, search

__all__ = ["SEARCH_WINDOW", "prefix_function", "search"]
