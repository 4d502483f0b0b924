"""Configuration and dependency wiring."""
