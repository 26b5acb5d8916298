"""Thin OS boundaries: terminal control and file persistence."""
