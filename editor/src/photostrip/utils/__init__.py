"""Geometry kernel and logging helpers."""
