"""Training plan progress tracking."""
