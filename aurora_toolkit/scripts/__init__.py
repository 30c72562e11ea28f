"""Scripts package for the Aurora toolkit."""
