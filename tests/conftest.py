"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import os
import time
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import tomli_w

AgeSetter = Callable[..., Path]


def set_age(path: Path, *, days: float = 0, hours: float = 0) -> Path:
    """Backdate a path's access and modification times without following links."""
    stamp = time.time() - days * 86400 - hours * 3600
    os.utime(path, (stamp, stamp), follow_symlinks=False)
    return path


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    """Point config and state directories at a throwaway location."""
    base = tmp_path_factory.mktemp("xdg")
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("XDG_CONFIG_HOME", str(base / "config"))
        mp.setenv("XDG_STATE_HOME", str(base / "state"))
        yield


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo handler changes made by setup_logging between tests."""
    yield
    logger = logging.getLogger("reclaimctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def aged() -> AgeSetter:
    """Return the helper that backdates a path."""
    return set_age


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Tree ``root/{a.txt (40d), sub/{b.txt (40d)}}`` with aged directories."""
    root = tmp_path / "root"
    sub = root / "sub"
    sub.mkdir(parents=True)
    (root / "a.txt").write_text("aaaa")
    (sub / "b.txt").write_text("bbbbbbbb")

    set_age(root / "a.txt", days=40)
    set_age(sub / "b.txt", days=40)
    set_age(sub, days=40)
    set_age(root, days=40)
    return root


@pytest.fixture
def snapshot() -> Callable[[Path], list[str]]:
    """Return a helper listing every path under (and including) a root."""

    def _snapshot(root: Path) -> list[str]:
        return sorted(str(p.relative_to(root.parent)) for p in [root, *root.rglob("*")])

    return _snapshot


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Settings file whose temp, working temp and cache roots live under tmp_path.

    Creates ``temp/``, ``work/`` and ``ccmcache/`` next to the file.
    """
    for name in ("temp", "work", "ccmcache"):
        (tmp_path / name).mkdir()

    path = tmp_path / "settings.toml"
    data = {
        "temp": {
            "hours": 0,
            "roots": [str(tmp_path / "temp")],
            "working_temp": str(tmp_path / "work"),
            "exclusions": [],
        },
        "cache": {"root": str(tmp_path / "ccmcache"), "days": 32, "exclusions": []},
    }
    path.write_text(tomli_w.dumps(data), encoding="utf-8")
    return path
