"""Trailer and streaming provider resolution."""
