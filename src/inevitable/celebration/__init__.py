"""Celebration particles and overlay."""
