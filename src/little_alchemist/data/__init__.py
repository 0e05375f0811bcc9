"""Packaged element, recipe and settings data plus their loaders."""
