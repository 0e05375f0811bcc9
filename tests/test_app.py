from __future__ import annotations

from little_alchemist import app
from little_alchemist.engine.loop import GameEngine


def test_run_headless_stops_engine_on_interrupt(monkeypatch, capsys):
    engines = []

    def interrupted_run(self):
        engines.append(self)
        self.start()
        raise KeyboardInterrupt

    monkeypatch.setattr(GameEngine, "run", interrupted_run)

    code = app.run_headless(max_steps=5, tick_rate=0)

    assert code == 130
    assert len(engines) == 1
    assert engines[0].running is False
    assert "Interrupted by user" in capsys.readouterr().out


def test_run_headless_reports_build_failure(tmp_path):
    bad = tmp_path / "broken.yaml"
    bad.write_text("elements: [\n", encoding="utf-8")
    assert app.run_headless(max_steps=1, tick_rate=0, data_path=bad) == 1
