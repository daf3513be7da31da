import os

import pytest

from corekit.dirstream import (
    DT_DIR,
    DT_REG,
    END_OF_STREAM,
    MAX_PATH,
    DirStream,
    name_hash,
    scandir,
)


@pytest.fixture
def populated(tmp_path):
    for name in ("alpha.txt", "beta.txt", "gamma.txt"):
        (tmp_path / name).write_text(name)
    (tmp_path / "sub").mkdir()
    return tmp_path


def test_name_hash_of_empty_name_is_seed():
    assert name_hash("") == 5381


def test_name_hash_fits_in_31_bits():
    for name in ("a", "file.txt", "x" * 200, "\u00e9\u4e2d"):
        value = name_hash(name)
        assert 0 <= value <= END_OF_STREAM


def test_name_hash_only_uses_leading_max_path_chars():
    long_name = "n" * (MAX_PATH + 40)
    assert name_hash(long_name) == name_hash(long_name[:MAX_PATH])


def test_name_hash_differs_for_different_names():
    assert name_hash("alpha") != name_hash("beta")


def test_read_lists_all_entries_with_types(populated):
    with DirStream(populated) as stream:
        entries = list(stream)
    by_name = {e.name: e for e in entries}
    assert set(by_name) == {"alpha.txt", "beta.txt", "gamma.txt", "sub"}
    assert by_name["sub"].type == DT_DIR
    assert by_name["alpha.txt"].type == DT_REG
    assert all(e.ino == 0 for e in entries)
    assert by_name["alpha.txt"].namlen == len("alpha.txt")


def test_offsets_point_at_following_entry(populated):
    with DirStream(populated) as stream:
        entries = list(stream)
    for current, following in zip(entries, entries[1:]):
        assert current.off == name_hash(following.name)
    assert entries[-1].off == END_OF_STREAM


def test_read_returns_none_at_end(populated):
    with DirStream(populated) as stream:
        list(stream)
        assert stream.read() is None
        assert stream.tell() == END_OF_STREAM


def test_tell_does_not_consume_entry(populated):
    with DirStream(populated) as stream:
        position = stream.tell()
        entry = stream.read()
    assert name_hash(entry.name) == position


def test_seek_returns_to_told_position(populated):
    with DirStream(populated) as stream:
        stream.read()
        position = stream.tell()
        expected = stream.read()
        stream.read()
        stream.seek(position)
        again = stream.read()
    assert again.name == expected.name


def test_seek_negative_ends_stream(populated):
    with DirStream(populated) as stream:
        stream.seek(-1)
        assert stream.read() is None


def test_seek_unknown_position_ends_stream(populated):
    with DirStream(populated) as stream:
        known = {name_hash(e.name) for e in stream}
        missing = next(v for v in range(1, 100) if v not in known)
        stream.seek(missing)
        assert stream.read() is None


def test_rewind_restarts_stream(populated):
    with DirStream(populated) as stream:
        first = [e.name for e in stream]
        stream.rewind()
        second = [e.name for e in stream]
    assert first == second


def test_rewind_recovers_after_invalid_seek(populated):
    with DirStream(populated) as stream:
        stream.seek(-5)
        stream.rewind()
        assert len(list(stream)) == 4


def test_empty_directory(tmp_path):
    with DirStream(tmp_path) as stream:
        assert stream.tell() == END_OF_STREAM
        assert stream.read() is None


def test_open_empty_name_raises():
    with pytest.raises(FileNotFoundError):
        DirStream("")


def test_open_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        DirStream(tmp_path / "missing")


def test_open_file_raises(tmp_path):
    target = tmp_path / "plain.txt"
    target.write_text("x")
    with pytest.raises(NotADirectoryError):
        DirStream(target)


def test_closed_stream_rejects_read(populated):
    stream = DirStream(populated)
    stream.close()
    stream.close()
    assert stream.closed is True
    with pytest.raises(ValueError):
        stream.read()
    with pytest.raises(ValueError):
        stream.tell()


def test_context_manager_closes(populated):
    with DirStream(populated) as stream:
        pass
    assert stream.closed is True


def test_relative_path_survives_chdir(populated, monkeypatch):
    monkeypatch.chdir(populated.parent)
    with DirStream(populated.name) as stream:
        first = [e.name for e in stream]
        monkeypatch.chdir(populated / "sub")
        stream.rewind()
        second = [e.name for e in stream]
    assert first == second
    assert len(first) == 4


def test_scandir_sorts_by_name(populated):
    names = [e.name for e in scandir(populated)]
    assert names == sorted(names)
    assert len(names) == 4


def test_scandir_filter_and_key(populated):
    entries = scandir(
        populated,
        filter=lambda e: e.type == DT_REG,
        key=lambda e: e.name,
    )
    assert [e.name for e in entries] == ["alpha.txt", "beta.txt", "gamma.txt"]


def test_scandir_reverse_key(populated):
    entries = scandir(populated, key=lambda e: [-ord(c) for c in e.name])
    names = [e.name for e in entries]
    assert names == sorted(names, reverse=True)


def test_scandir_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        scandir(os.path.join(tmp_path, "nope"))