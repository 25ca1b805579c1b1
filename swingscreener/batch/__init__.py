"""Batch screening of a symbol universe: scan, rank and summarise."""
