"""Configuration - Process settings."""
