"""Shared constants, configuration, errors, logging, and typed models."""
