"""vaultmap - route manifest builder for Obsidian-style notes."""

__version__ = "0.1.0"
