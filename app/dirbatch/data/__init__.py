"""Bundled data files for dirbatch."""
