"""Utility helpers for the gac tool."""
