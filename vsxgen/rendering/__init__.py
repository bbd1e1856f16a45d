"""Template rendering and scaffold materialization."""
