"""Configuration for the hold'em engine."""
