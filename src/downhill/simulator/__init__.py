"""Pygame desktop front end."""
