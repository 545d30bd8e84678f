"""Video export."""
