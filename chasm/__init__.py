"""Chasm - publishing backend for front-matter markdown posts and images."""

__version__ = "0.1.0"
