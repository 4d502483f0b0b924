"""Small helpers shared by the Discord layer and the entry point."""
