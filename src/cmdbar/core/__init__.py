"""Progress session state and lifecycle."""
