from __future__ import annotations

import sys
from pathlib import Path

from moddev.search_path import SearchPath


def test_search_path_deduplicates_and_keeps_order(tmp_path: Path) -> None:
    a_dir = tmp_path / "a"
    b_dir = tmp_path / "b"
    search_path = SearchPath([a_dir, b_dir, a_dir])
    assert search_path.entries == (a_dir, b_dir)
    assert len(search_path) == 2
    assert str(b_dir) in search_path
    assert search_path.add(b_dir / ".." / "b") is False


def test_bind_inserts_entries_at_front_once(tmp_path: Path) -> None:
    a_dir = tmp_path / "a"
    b_dir = tmp_path / "b"
    live = ["/existing", str(b_dir)]
    search_path = SearchPath([a_dir, b_dir])
    search_path.bind(live)
    assert search_path.bound
    assert live == [str(a_dir), "/existing", str(b_dir)]

    c_dir = tmp_path / "c"
    assert search_path.add(c_dir)
    assert live == [str(a_dir), "/existing", str(c_dir), str(b_dir)]


def test_discard_removes_from_bound_list_and_importer_cache(
    tmp_path: Path, monkeypatch
) -> None:
    a_dir = tmp_path / "a"
    live: list[str] = []
    search_path = SearchPath([a_dir])
    search_path.bind(live)
    monkeypatch.setitem(sys.path_importer_cache, str(a_dir), None)

    assert search_path.discard(a_dir)
    assert live == []
    assert str(a_dir) not in sys.path_importer_cache
    assert search_path.entries == ()
    assert search_path.discard(a_dir) is False


def test_unbound_discard_only_touches_own_entries(tmp_path: Path) -> None:
    search_path = SearchPath([tmp_path / "a", tmp_path / "b"])
    assert search_path.discard(tmp_path / "a")
    assert list(search_path) == [tmp_path / "b"]
