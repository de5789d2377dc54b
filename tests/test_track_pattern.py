"""
Command-line tests for scripts/track_pattern.py.
"""

import importlib.util
from pathlib import Path

import pytest


SCRIPT = Path(__file__).parent.parent / "scripts" / "track_pattern.py"

TINY_YAML = """
name: Tiny
stitches:
  - {id: 1, abbreviation: sc, name: Single Crochet}
instruction_groups:
  - label: Round 1
    stitch_entries:
      - {stitch_id: 1, count: 3}
"""


@pytest.fixture(scope="module")
def track_pattern():
    spec = importlib.util.spec_from_file_location("track_pattern", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def run(track_pattern, tmp_path):
    patterns_dir = tmp_path / "patterns"
    patterns_dir.mkdir()
    (patterns_dir / "tiny.yaml").write_text(TINY_YAML, encoding="utf-8")
    base = ["--db", str(tmp_path / "sessions.db"), "--patterns-dir", str(patterns_dir)]

    def _run(*args):
        track_pattern.main(base + list(args))

    return _run


class TestPatternsDir:
    def test_start_uses_patterns_dir(self, run, capsys):
        run("start", "tiny")
        out = capsys.readouterr().out
        assert "Session 1: Tiny [active]" in out
        assert "0/3 stitches" in out

    def test_forward_back_and_show(self, run, capsys):
        run("start", "tiny")
        run("forward", "1", "--steps", "2")
        assert "2/3 stitches" in capsys.readouterr().out

        run("back", "1")
        assert "1/3 stitches" in capsys.readouterr().out

        run("show", "1")
        assert "1/3 stitches" in capsys.readouterr().out

    def test_forward_to_completion(self, run, capsys):
        run("start", "tiny")
        run("forward", "1", "--steps", "5")
        assert "Session 1: Tiny [completed]" in capsys.readouterr().out

    def test_unknown_session_exits(self, run):
        with pytest.raises(SystemExit) as exc:
            run("show", "7")
        assert exc.value.code == 1
