"""Outer interfaces (command line)."""
