"""Service layer orchestrating the navigation session."""
