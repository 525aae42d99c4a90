import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Make the extstats package importable when running tests from a checkout
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from extstats.surface import OutputSurface  # noqa: E402


class RecordingSurface(OutputSurface):
    """OutputSurface that also remembers every (color, text) it painted."""

    def __init__(self, console: Console):
        super().__init__(console)
        self.painted = []

    def paint(self, color, text, end=""):
        self.painted.append((color, text))
        super().paint(color, text, end=end)

    @property
    def text(self) -> str:
        return self.console.file.getvalue()

    def colors_for(self, needle: str):
        return [color for color, text in self.painted if needle in text]


def _plain_console(**kwargs) -> Console:
    opts = dict(file=io.StringIO(), width=200, no_color=True, highlight=False, force_terminal=False)
    opts.update(kwargs)
    return Console(**opts)


@pytest.fixture
def surface():
    return RecordingSurface(_plain_console())


@pytest.fixture
def tty_surface(monkeypatch):
    monkeypatch.setenv("TERM", "xterm-256color")
    return RecordingSurface(_plain_console(force_terminal=True, width=80, height=25))


def make_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(b"x" * size)
    return path


@pytest.fixture
def sample_tree(tmp_path):
    root = tmp_path / "root"
    make_file(root / "notes.txt", 500)
    make_file(root / "blob.bin", 2_000_000)
    return root
