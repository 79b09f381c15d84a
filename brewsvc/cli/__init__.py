"""CLI module for brewsvc."""
