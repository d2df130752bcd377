# tests/test_cache.py
import os
import pytest
from concurrent.futures import ThreadPoolExecutor

from projctx.core.cache import ContentCache
from projctx.errors import FileReadError


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "index.js"
    path.write_text("console.log('v1');", encoding="utf-8")
    return path


def bump_mtime(path, content):
    """Rewrites path and pushes its mtime forward so the change is visible."""
    stat = os.stat(path)
    path.write_text(content, encoding="utf-8")
    os.utime(path, (stat.st_atime + 10, stat.st_mtime + 10))


def test_miss_then_hit(source_file):
    cache = ContentCache()
    first = cache.get(source_file)
    second = cache.get(source_file)

    assert first.content == "console.log('v1');"
    assert second is first
    assert len(cache) == 1


def test_default_cache_never_invalidates(source_file):
    cache = ContentCache()
    cache.get(source_file)
    bump_mtime(source_file, "console.log('v2');")

    assert cache.get(source_file).content == "console.log('v1');"


def test_revalidate_rereads_on_mtime_change(source_file):
    cache = ContentCache(revalidate=True)
    first = cache.get(source_file)
    bump_mtime(source_file, "console.log('v2');")

    second = cache.get(source_file)
    assert second.content == "console.log('v2');"
    assert second.mtime != first.mtime


def test_lru_eviction(tmp_path):
    paths = []
    for name in ["a.js", "b.js", "c.js"]:
        p = tmp_path / name
        p.write_text(name, encoding="utf-8")
        paths.append(p)

    cache = ContentCache(max_entries=2)
    cache.get(paths[0])
    cache.get(paths[1])
    cache.get(paths[0])  # a is now most recently used
    cache.get(paths[2])

    assert paths[0] in cache
    assert paths[1] not in cache
    assert paths[2] in cache


def test_invalid_max_entries():
    with pytest.raises(ValueError):
        ContentCache(max_entries=0)


def test_missing_file_raises_file_read_error(tmp_path):
    missing = tmp_path / "gone.js"
    cache = ContentCache()
    with pytest.raises(FileReadError) as exc_info:
        cache.get(missing)
    assert exc_info.value.path == str(missing)
    assert len(cache) == 0


def test_undecodable_bytes_are_replaced(tmp_path):
    path = tmp_path / "data.json"
    path.write_bytes(b'{"a": "\xff"}')
    entry = ContentCache().get(path)
    assert entry.content.startswith('{"a": "')
    assert "�" in entry.content


def test_concurrent_misses_converge(source_file):
    cache = ContentCache()
    with ThreadPoolExecutor(max_workers=8) as executor:
        entries = list(executor.map(lambda _: cache.get(source_file), range(32)))

    assert len(cache) == 1
    assert {e.content for e in entries} == {"console.log('v1');"}
    assert cache.get(source_file) in entries


def test_clear(source_file):
    cache = ContentCache()
    cache.get(source_file)
    cache.clear()
    assert len(cache) == 0
