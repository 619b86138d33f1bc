"""Configuration and formatting helpers."""
