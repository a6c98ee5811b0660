"""Filesystem and frontmatter adapters."""
