"""
Simulation engine: element catalog, recipe registry, object pool and the
pointer-driven interaction state machine.

Nothing in this package draws; renderers read Snapshot objects and forward
input events.
"""
