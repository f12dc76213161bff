"""Shared parsing, configuration and formatting utilities."""
