"""Configuration and visualization helpers."""
