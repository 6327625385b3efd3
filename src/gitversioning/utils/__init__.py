"""Utility helpers for gitversioning."""
