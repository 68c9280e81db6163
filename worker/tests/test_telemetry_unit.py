import json

from worker.app.telemetry import Telemetry


def test_counters_and_stats(tmp_path):
    t = Telemetry(log_dir=str(tmp_path))
    t.increment("generate_total")
    t.increment("samples_total", 3)
    t.increment("not_a_counter")
    t.set_error("boom")

    stats = t.get_stats()
    assert stats["generate_total"] == 1
    assert stats["generate_failed"] == 0
    assert stats["samples_total"] == 3
    assert stats["last_error"] == "boom"
    assert "not_a_counter" not in stats


def test_log_json_appends_lines(tmp_path):
    t = Telemetry(log_dir=str(tmp_path / "logs"))
    t.log_json("generate", image_path="/img.png", produced=2)
    t.log_json("generate_failed", level="error", error="exit status 1")

    lines = (tmp_path / "logs" / "worker.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first, second = (json.loads(line) for line in lines)
    assert first["event"] == "generate"
    assert first["subsystem"] == "alt_text"
    assert first["produced"] == 2
    assert second["level"] == "error"


def test_log_rotation(tmp_path):
    t = Telemetry(log_dir=str(tmp_path), max_log_mb=1)
    log_file = tmp_path / "worker.jsonl"
    log_file.write_bytes(b"x" * (1024 * 1024 + 1))

    t.log_json("generate")

    assert (tmp_path / "worker.jsonl.1").exists()
    assert len(log_file.read_text(encoding="utf-8").splitlines()) == 1
