"""
Little Alchemist package root.

A drag-and-drop "combine elements" sandbox. The simulation engine lives in
``little_alchemist.engine`` and stays free of rendering code; the Arcade
window in ``little_alchemist.ui`` only reads snapshots and forwards input.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "engine",
]
