"""Configuration for the program tree engine."""
