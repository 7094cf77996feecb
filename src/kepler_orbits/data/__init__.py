"""Preset orbits and scripted mission schedules."""
