import io
import os
import subprocess
import sys
from pathlib import Path

import pytest
from rich.console import Console

from extstats import cli
from extstats.colors import to_color
from extstats.config import Settings
from extstats.report import Reporter, table_header
from extstats.stats import AccumulatorStore
from extstats.surface import OutputSurface
from extstats.topk import TopKSelector


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("EXTSTATS_"):
            monkeypatch.delenv(name, raising=False)


def _ext_rows(text):
    lines = text.splitlines()
    start = lines.index(table_header("ext")) + 2
    rows = []
    for line in lines[start:]:
        if not line.strip():
            break
        rows.append(line.split()[0])
    return rows


def _top_paths(text):
    lines = text.splitlines()
    start = next(i for i, line in enumerate(lines) if line.startswith("Top ")) + 2
    return [line.split()[-1] for line in lines[start:] if line.strip()]


def test_strip_quotes():
    assert cli.strip_quotes('"C:\\My Dir"') == "C:\\My Dir"
    assert cli.strip_quotes('"left') == "left"
    assert cli.strip_quotes('right"') == "right"
    assert cli.strip_quotes("plain") == "plain"
    assert cli.strip_quotes('""x""') == '"x"'


def test_parse_tokens_walk_any_case_and_targets():
    targets, walk = cli.parse_tokens(['"-WALK"', '"/a b"', "-other"])
    assert walk is True
    assert targets == ["/a b", "-other"]


def test_parse_tokens_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    targets, walk = cli.parse_tokens([])
    assert walk is False
    assert targets == [os.getcwd()]


def test_end_to_end_two_extensions(sample_tree, surface):
    rc = cli.main([str(sample_tree)], surface=surface)
    assert rc == 0
    text = surface.text
    assert f"  [1]: {sample_tree}" in text
    assert _ext_rows(text) == [".bin", ".txt"]
    assert "Top 500 files:" in text
    top = _top_paths(text)
    assert top == [str(sample_tree / "blob.bin"), str(sample_tree / "notes.txt")]


def test_walk_mode_traces_every_entry(sample_tree, surface):
    (sample_tree / "sub").mkdir()
    (sample_tree / "sub" / "inner.txt").write_bytes(b"abc")
    rc = cli.main(["-Walk", str(sample_tree)], surface=surface)
    assert rc == 0
    text = surface.text
    assert "<DIR>" in text
    assert any(line.endswith("|  inner.txt") for line in text.splitlines())
    assert any(line.endswith("blob.bin") and "2,000,000 B" in line for line in text.splitlines())
    # directories are traced but not counted
    assert _ext_rows(text) == [".bin", ".txt"]


def test_missing_target_is_logged_and_run_completes(tmp_path, surface):
    rc = cli.main([str(tmp_path / "nope")], surface=surface)
    assert rc == 0
    assert "ERROR:" in surface.text
    assert "1 entries could not be read" in surface.text


def test_top_count_from_environment(sample_tree, surface, monkeypatch):
    monkeypatch.setenv("EXTSTATS_TOP", "1")
    assert cli.main([str(sample_tree)], surface=surface) == 0
    assert "Top 1 files:" in surface.text
    assert _top_paths(surface.text) == [str(sample_tree / "blob.bin")]


def test_bad_environment_is_a_usage_error(sample_tree, surface, monkeypatch, capsys):
    monkeypatch.setenv("EXTSTATS_TOP", "many")
    assert cli.main([str(sample_tree)], surface=surface) == 2
    assert "EXTSTATS_TOP" in capsys.readouterr().err


def test_broken_invariant_is_fatal(sample_tree, surface, monkeypatch, capsys):
    monkeypatch.setattr("extstats.report.classify", lambda n, *a, **k: to_color(16))
    rc = cli.main([str(sample_tree)], surface=surface)
    assert rc == 70
    assert "ASSERTION FAILED in to_color" in capsys.readouterr().err


def test_live_panel_on_terminal(sample_tree, tty_surface):
    settings = Settings(targets=[str(sample_tree)], refresh_interval=0.0)
    store, top = AccumulatorStore(), TopKSelector(10)
    errors = cli.run_scan(settings, Reporter(tty_surface), store, top)
    assert errors == 0
    assert store.total.count == 2
    assert "count: 2" in tty_surface.text
    assert "size on disk:" in tty_surface.text
    assert [r.logical_size for r in top.finalize()] == [2_000_000, 500]


def test_no_panel_when_redirected(sample_tree, surface):
    settings = Settings(targets=[str(sample_tree)])
    cli.run_scan(settings, Reporter(surface), AccumulatorStore(), TopKSelector(10))
    assert "count:" not in surface.text


def test_module_entry_point(sample_tree):
    env = dict(os.environ, EXTSTATS_NO_PAUSE="1")
    proc = subprocess.run(
        [sys.executable, "-m", "extstats", str(sample_tree)],
        capture_output=True, text=True, timeout=60,
        cwd=str(Path(__file__).resolve().parents[1]), env=env,
    )
    assert proc.returncode == 0
    assert "Top 500 files:" in proc.stdout
    assert "blob.bin" in proc.stdout


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="needs a filesystem that stores raw name bytes")
def test_undecodable_name_does_not_abort_run(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    (root / "ok.txt").write_bytes(b"abc")
    with open(os.path.join(os.fsencode(str(root)), b"bad\xff.bin"), "wb") as f:
        f.write(b"x" * 10)

    raw = io.BytesIO()
    stream = io.TextIOWrapper(raw, encoding="utf-8", errors="strict")
    out = OutputSurface(Console(file=stream, width=200, no_color=True, force_terminal=False))
    rc = cli.main(["-walk", str(root)], surface=out)
    stream.flush()
    text = raw.getvalue().decode("utf-8")

    assert rc == 0
    assert "bad�.bin" in text
    assert "Top 500 files:" in text
    assert _ext_rows(text) == [".bin", ".txt"]


def test_interrupt_at_final_prompt_is_quiet(surface, monkeypatch):
    def interrupt(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(surface.console, "input", interrupt)
    cli._acknowledge(surface)
    assert surface.query_cursor() == (0, 1)
