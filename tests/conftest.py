"""Shared fixtures for kiln tests."""

import os
from pathlib import Path

import pytest

# Fixed source mtime: Tue, 14 Nov 2023 22:13:20 GMT
SOURCE_MTIME = 1_700_000_000


class SpyCompiler:
    """Compiler double that records every source path it is given."""

    def __init__(self, output: str | bytes = "chickenscript") -> None:
        self.output = output
        self.calls: list[str] = []

    def __call__(self, source_file: str) -> str | bytes:
        self.calls.append(source_file)
        return self.output

    @property
    def source_file(self) -> str | None:
        """The last compiled path, or None if never called."""
        return self.calls[-1] if self.calls else None


@pytest.fixture
def compiler() -> SpyCompiler:
    return SpyCompiler()


@pytest.fixture
def eggscripts(tmp_path: Path) -> Path:
    """Source tree of eggscripts with a pinned mtime."""
    root = tmp_path / "eggscripts"
    (root / "subdir").mkdir(parents=True)
    (root / "folder.eggscript").mkdir()

    for rel in ("application.eggscript", "subdir/application.eggscript"):
        path = root / rel
        path.write_text("cluck cluck")
        os.utime(path, (SOURCE_MTIME, SOURCE_MTIME))

    (root / "blah.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "notes.unknownext").write_text("?")
    (tmp_path / "secret.eggscript").write_text("do not serve")
    return root.resolve()
