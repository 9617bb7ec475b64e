"""Repository acquisition helpers."""
