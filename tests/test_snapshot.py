import dataclasses

import pytest

from little_alchemist.engine.events import PointerPressed
from little_alchemist.engine.geometry import Vec2
from little_alchemist.engine.interaction import DragState


def test_initial_snapshot(sandbox):
    snap = sandbox.snapshot(0.0)
    assert snap.palette == (("Fire", 0), ("Water", 0), ("Earth", 0), ("Air", 0))
    assert len(snap.catalog) == 26
    assert snap.instances == ()
    assert snap.marker is None
    assert snap.object_count == 0
    assert snap.max_objects == 50
    assert snap.state is DragState.IDLE


def test_catalog_views_hide_undiscovered_names(sandbox):
    snap = sandbox.snapshot(0.0)
    fire = snap.element("Fire")
    steam = snap.element("Steam")
    assert fire.display_name == "Fire"
    assert fire.formula == "Basic Element"
    assert steam.display_name == "???"
    assert steam.formula == "Fire + Water"
    assert snap.element("Plasma") is None


def test_instances_reflect_pool_and_drag(sandbox):
    h = sandbox.pool.insert("Fire", Vec2(100, 100), 0.0)
    sandbox.advance([PointerPressed(Vec2(110, 110))], 1.0)

    snap = sandbox.snapshot(1.0)
    assert len(snap.instances) == 1
    view = snap.instances[0]
    assert (view.handle, view.element_id, view.x, view.y) == (h, "Fire", 100, 100)
    assert view.dragging is True
    assert snap.state is DragState.DRAGGING


def test_snapshot_does_not_change_after_mutation(sandbox):
    sandbox.pool.insert("Fire", Vec2(100, 100), 0.0)
    snap = sandbox.snapshot(0.0)
    sandbox.pool.insert("Water", Vec2(300, 300), 0.0)

    assert snap.object_count == 1
    assert len(snap.instances) == 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.object_count = 5
