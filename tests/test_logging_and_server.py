import json
import logging

from layoutforge import create_app, logging_utils
from layoutforge import server
from layoutforge.server import _configure_logging


def test_key_value_format(monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    line = logging_utils._format("info", event="room placed", rooms=3, skipped=None)
    assert line.startswith("level=info ts=")
    assert "event=room_placed" in line
    assert "rooms=3" in line
    assert "skipped" not in line


def test_json_format(monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    rec = json.loads(logging_utils._format("warn", event="x", size=(4, 4), gone=None))
    assert rec["level"] == "warn" and rec["event"] == "x"
    assert rec["size"] == [4, 4]
    assert "gone" not in rec and isinstance(rec["ts"], int)


def test_level_threshold_and_streams(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    log = logging_utils.get_logger("layoutforge.test")
    log.info(event="hidden")
    log.warn(event="shown")
    log.error(event="bad")
    out = capsys.readouterr()
    assert "hidden" not in out.out
    assert "event=shown" in out.out and "logger=layoutforge.test" in out.out
    assert "event=bad" in out.err


def test_get_logger_is_cached():
    assert logging_utils.get_logger("a.b") is logging_utils.get_logger("a.b")
    assert logging_utils.log.name == "layoutforge"


def test_configure_logging_writes_rotating_file(tmp_path, monkeypatch):
    app = create_app()
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        # Run twice to ensure idempotence (handler replace path)
        _configure_logging(app)
        path = _configure_logging(app)
        assert len(root.handlers) == 2
        logging.getLogger("layoutforge.test").info("hello file")
        for h in root.handlers:
            h.flush()
        assert (tmp_path / "layoutforge.log").exists()
        assert path == str(tmp_path / "layoutforge.log")
        assert "hello file" in (tmp_path / "layoutforge.log").read_text()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)


def test_configure_logging_follows_event_level(tmp_path, monkeypatch):
    app = create_app()
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    monkeypatch.setattr(server, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        _configure_logging(app)
        assert root.level == logging.WARNING
        logging.getLogger("layoutforge.test").info("quiet")
        logging.getLogger("layoutforge.test").warning("loud")
        for h in root.handlers:
            h.flush()
        text = (tmp_path / "layoutforge.log").read_text()
        assert "loud" in text and "quiet" not in text
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)


def test_bound_logger_repeats_context(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    base = logging_utils.get_logger("layoutforge.bound")
    bound = base.bind(seed=99, level_hint="x")
    bound.info(event="a")
    bound.info(event="b", seed=7)
    base.info(event="c")
    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [rec["seed"] for rec in lines[:2]] == [99, 7]
    assert lines[0]["logger"] == "layoutforge.bound"
    assert "seed" not in lines[2]
    assert base.context == {}


def test_composer_logs_carry_seed(monkeypatch, capsys):
    from layoutforge.dungeon import DungeonComposer, DungeonGenerationParams

    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    DungeonComposer(DungeonGenerationParams(grid_width=30, grid_height=30), seed=321).run()
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    generated = [e for e in events if e["event"] == "dungeon_generated"]
    assert generated and generated[0]["seed"] == 321
    assert all(e["seed"] == 321 for e in events if e["event"] == "dungeon_level_generated")
