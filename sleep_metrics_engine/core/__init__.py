"""Core data model, algorithms and pipeline for the sleep metrics engine."""
