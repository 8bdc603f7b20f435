"""Command line interface for the course dataset provider."""
