"""Configuration settings and data models."""
