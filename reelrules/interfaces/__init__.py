"""Interfaces layer - HTTP and CLI presentation."""
