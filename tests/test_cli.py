"""Tests for the clipboard-to-file CLI commands (paste, inspect, check-name, config, watch)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from clipboard_to_file.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch):
    """Run every command from an empty directory with no user-global config."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path / "home"))
    with patch("clipboard_to_file.cli.configure_logging") as configure:
        yield configure


def _clip(tmp_path: Path, text: str) -> str:
    path = tmp_path / "clip.txt"
    path.write_text(text)
    return str(path)


# ── paste ────────────────────────────────────────────────────────────


class TestPaste:
    def test_single_file(self, tmp_path: Path, dest: Path):
        result = runner.invoke(app, ["paste", _clip(tmp_path, "notes.md"), "--dest", str(dest)])
        assert result.exit_code == 0
        assert (dest / "notes.md").read_text() == ""

    def test_tree_from_stdin(self, dest: Path):
        result = runner.invoke(
            app, ["paste", "-", "--dest", str(dest)], input="src/\n  main.py\n  util.py\n"
        )
        assert result.exit_code == 0
        assert (dest / "src" / "main.py").is_file()
        assert (dest / "src" / "util.py").is_file()

    def test_conflict_rename(self, tmp_path: Path, dest: Path):
        (dest / "a.txt").write_text("keep")
        result = runner.invoke(
            app,
            ["paste", _clip(tmp_path, "a.txt\nb.txt"), "--dest", str(dest), "--on-conflict", "rename"],
        )
        assert result.exit_code == 0
        assert (dest / "a.txt").read_text() == "keep"
        assert (dest / "a (1).txt").is_file()
        assert (dest / "b.txt").is_file()

    def test_conflict_replace_with_content(self, tmp_path: Path, dest: Path):
        (dest / "app.js").write_text("old")
        result = runner.invoke(
            app,
            ["paste", _clip(tmp_path, "app.js console.log(1)"), "-d", str(dest), "--on-conflict", "replace"],
        )
        assert result.exit_code == 0
        assert (dest / "app.js").read_text() == "console.log(1)"

    def test_prose_creates_nothing(self, tmp_path: Path, dest: Path):
        result = runner.invoke(app, ["paste", _clip(tmp_path, "Just some words here, nothing else?"), "-d", str(dest)])
        assert result.exit_code == 0
        assert "Nothing created" in result.stdout
        assert list(dest.iterdir()) == []

    def test_missing_source(self, tmp_path: Path, dest: Path):
        result = runner.invoke(app, ["paste", str(tmp_path / "nope.txt"), "-d", str(dest)])
        assert result.exit_code == 1

    def test_invalid_regex_name_fails(self, tmp_path: Path, dest: Path):
        cfg = tmp_path / "cfg.yaml"
        cfg.write_text("classifier:\n  content_regexes: ['^name=(.+)$']\n")
        result = runner.invoke(
            app, ["-c", str(cfg), "paste", _clip(tmp_path, "name=bad?.txt\nbody"), "-d", str(dest)]
        )
        assert result.exit_code == 1
        assert list(dest.iterdir()) == []

    def test_dest_from_config(self, tmp_path: Path, dest: Path):
        cfg = tmp_path / "cfg.yaml"
        cfg.write_text(f"destination:\n  paths: ['{dest.as_posix()}']\n")
        result = runner.invoke(app, ["-c", str(cfg), "paste", _clip(tmp_path, "todo.txt")])
        assert result.exit_code == 0
        assert (dest / "todo.txt").is_file()

    def test_defaults_to_cwd(self, tmp_path: Path):
        result = runner.invoke(app, ["paste", _clip(tmp_path, "here.txt")])
        assert result.exit_code == 0
        assert (Path.cwd() / "here.txt").is_file()


# ── Global options ───────────────────────────────────────────────────


class TestGlobalOptions:
    def test_missing_config(self, tmp_path: Path):
        result = runner.invoke(app, ["-c", str(tmp_path / "missing.yaml"), "check-name", "a.txt"])
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_undecodable_config(self, tmp_path: Path):
        cfg = tmp_path / "cfg.yaml"
        cfg.write_bytes(b"log_level: \xe9\n")
        result = runner.invoke(app, ["-c", str(cfg), "check-name", "a.txt"])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_logging_configured(self, tmp_path: Path, _isolated):
        cfg = tmp_path / "cfg.yaml"
        cfg.write_text("log_level: debug\nlog_format: json\n")
        runner.invoke(app, ["-c", str(cfg), "check-name", "a.txt"])
        _isolated.assert_called_once_with("debug", "json")


# ── inspect ──────────────────────────────────────────────────────────


class TestInspect:
    def test_tree(self, tmp_path: Path):
        result = runner.invoke(app, ["inspect", _clip(tmp_path, "├── src/\n│   └── main.py\n└── README.md")])
        assert result.exit_code == 0
        assert "tree_glyph" in result.stdout
        assert "main.py" in result.stdout
        assert "1 folder(s), 2 file(s)" in result.stdout

    def test_batch(self, tmp_path: Path):
        result = runner.invoke(app, ["inspect", _clip(tmp_path, "one.txt\ntwo.md")])
        assert result.exit_code == 0
        assert "word_count" in result.stdout
        assert "two.md" in result.stdout

    def test_nothing(self, tmp_path: Path):
        result = runner.invoke(app, ["inspect", _clip(tmp_path, "Hello, how are you today?")])
        assert result.exit_code == 0
        assert "No filename found" in result.stdout

    def test_creates_nothing(self, tmp_path: Path):
        runner.invoke(app, ["inspect", _clip(tmp_path, "keep.txt")])
        assert not (Path.cwd() / "keep.txt").exists()


# ── check-name ───────────────────────────────────────────────────────


class TestCheckName:
    def test_valid(self):
        result = runner.invoke(app, ["check-name", "a.txt", "notes.md"])
        assert result.exit_code == 0

    def test_invalid(self):
        result = runner.invoke(app, ["check-name", "a.txt", "CON.txt"])
        assert result.exit_code == 1
        assert "reserved" in result.stdout


# ── config ───────────────────────────────────────────────────────────


class TestConfigCommands:
    def test_init(self):
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert Path("clipboard-to-file.yaml").is_file()

    def test_init_refuses_overwrite(self):
        runner.invoke(app, ["config", "init"])
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_init_force(self):
        Path("clipboard-to-file.yaml").write_text("enabled: true\n")
        result = runner.invoke(app, ["config", "init", "--force"])
        assert result.exit_code == 0
        assert "large_tree_threshold" in Path("clipboard-to-file.yaml").read_text()

    def test_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "word_count_limit" in result.stdout

    def test_extensions_list(self):
        result = runner.invoke(app, ["config", "extensions"])
        assert result.exit_code == 0
        assert ".json" in result.stdout

    def test_extensions_seed(self, tmp_path: Path):
        target = tmp_path / "extensions.txt"
        result = runner.invoke(app, ["config", "extensions", "--seed", str(target)])
        assert result.exit_code == 0
        assert target.read_text().splitlines()[0] == ".txt"


# ── watch ────────────────────────────────────────────────────────────


class TestWatch:
    def test_starts_and_stops_on_interrupt(self, dest: Path):
        fake_threading = MagicMock()
        fake_threading.Event.return_value.wait.side_effect = KeyboardInterrupt
        with (
            patch("clipboard_to_file.cli.threading", fake_threading),
            patch("clipboard_to_file.cli.ClipboardMonitor") as monitor_cls,
            patch("clipboard_to_file.cli.ConfigWatcher") as watcher_cls,
        ):
            result = runner.invoke(app, ["watch", "--dest", str(dest), "--yes"])
        assert result.exit_code == 0
        monitor_cls.return_value.start.assert_called_once()
        monitor_cls.return_value.stop.assert_called_once()
        watcher_cls.return_value.start.assert_called_once()
        watcher_cls.return_value.stop.assert_called_once()

    def test_monitor_feeds_processor(self, dest: Path):
        fake_threading = MagicMock()
        fake_threading.Event.return_value.wait.side_effect = KeyboardInterrupt
        with (
            patch("clipboard_to_file.cli.threading", fake_threading),
            patch("clipboard_to_file.cli.ClipboardMonitor") as monitor_cls,
            patch("clipboard_to_file.cli.ConfigWatcher"),
        ):
            runner.invoke(app, ["watch", "--dest", str(dest), "--yes"])
        callback = monitor_cls.call_args.args[0]
        callback("from-clipboard.txt")
        assert (dest / "from-clipboard.txt").is_file()
