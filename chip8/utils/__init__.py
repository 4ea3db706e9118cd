"""Constants and configuration helpers."""
