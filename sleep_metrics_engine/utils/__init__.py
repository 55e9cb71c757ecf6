"""Utility helpers: calendar-day windows and display formatting."""
