"""Two-player push stones grid game: board loading, move resolution and automated players."""

__version__ = "1.0.0"
