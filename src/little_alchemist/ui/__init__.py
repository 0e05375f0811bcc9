"""Rendering adapters. Only the Arcade window lives here; the engine never imports it."""
