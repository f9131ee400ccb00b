"""Tile map reading and checking, plus an in-memory display, images and events for drawing maps."""

__version__ = "0.1.0"