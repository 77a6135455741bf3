"""Concave hull editor: load 2D points, compute their concave hull, edit and export it."""
