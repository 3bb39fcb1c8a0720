"""Matching application layer."""
