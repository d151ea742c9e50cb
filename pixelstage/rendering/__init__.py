"""Immediate-mode renderers over a drawing surface."""
