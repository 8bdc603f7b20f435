"""Dataset acquisition and transformation.

This package downloads remote datasets and archives and derives
the enriched MovieLens tables for the store layer.
"""
