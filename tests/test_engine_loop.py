from __future__ import annotations

from little_alchemist.engine.events import MutationKind, PointerPressed
from little_alchemist.engine.geometry import Vec2
from little_alchemist.engine.loop import GameConfig, GameEngine


def test_engine_runs_exact_steps(sandbox):
    engine = GameEngine(sandbox, GameConfig(tick_rate=0, max_steps=5))
    engine.run()
    assert engine.step == 5
    assert engine.running is False


def test_engine_update_and_stop(sandbox):
    engine = GameEngine(sandbox, GameConfig(tick_rate=0, max_steps=2))
    engine.start()
    engine.update(0.016)
    engine.update(0.016)
    assert engine.step == 2
    assert engine.running is False
    assert engine.update(0.016) == []
    assert engine.step == 2


def test_fed_events_are_applied_on_next_update(sandbox):
    engine = GameEngine(sandbox, GameConfig(tick_rate=0))
    engine.start()
    engine.feed(PointerPressed(Vec2(720, 20)))
    assert sandbox.pool.size() == 0

    mutations = engine.update(0.5)

    assert [m.kind for m in mutations] == [MutationKind.SPAWNED]
    assert sandbox.pool.get(mutations[0].handle).created_at == 0.5
    assert engine.update(0.25) == []
    assert engine.clock == 0.75
