"""Core types and protocols."""
