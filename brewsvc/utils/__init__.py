"""Utility helpers for brewsvc."""
