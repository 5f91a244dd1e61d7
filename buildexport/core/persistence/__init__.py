"""Generated file persistence."""
