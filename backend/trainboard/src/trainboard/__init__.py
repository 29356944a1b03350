"""Trainboard: trains, stops and announcements API with a bundled web app."""

__version__ = "1.0.0"
