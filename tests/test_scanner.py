"""Tests for the archive scanner."""

import io

import pytest

from conftest import MANIFEST, MODS_TOML, make_jar
from modversion.archive import scan_archive
from modversion.exceptions import ArchiveError
from modversion.models import EntryName


class TrackingStream(io.BytesIO):
    """BytesIO that remembers being closed."""

    was_closed = False

    def close(self):
        self.was_closed = True
        super().close()


class UnseekableStream(io.RawIOBase):
    def __init__(self, data: bytes):
        self._inner = io.BytesIO(data)

    def readable(self):
        return True

    def seekable(self):
        return False

    def readinto(self, buffer):
        chunk = self._inner.read(len(buffer))
        buffer[: len(chunk)] = chunk
        return len(chunk)


def test_collects_known_entries_only():
    jar = make_jar(
        {
            "META-INF/mods.toml": MODS_TOML,
            "META-INF/MANIFEST.MF": MANIFEST,
            "com/example/Mod.class": b"\xca\xfe\xba\xbe",
            "assets/example/lang/en_us.json": b"{}",
        }
    )
    entries = scan_archive(io.BytesIO(jar))
    assert entries == {
        EntryName.MODS_TOML: MODS_TOML,
        EntryName.MANIFEST: MANIFEST,
    }


def test_strips_single_leading_slash():
    jar = make_jar({"/mcmod.info": b"{}", "//module-info.class": b"x"})
    entries = scan_archive(io.BytesIO(jar))
    assert entries == {EntryName.MCMOD_INFO: b"{}"}


def test_empty_archive():
    assert scan_archive(io.BytesIO(make_jar({}))) == {}


def test_unseekable_stream_is_spooled():
    jar = make_jar({"mcmod.info": b"[]"})
    entries = scan_archive(UnseekableStream(jar))
    assert entries == {EntryName.MCMOD_INFO: b"[]"}


def test_closes_stream_on_success():
    stream = TrackingStream(make_jar({"mcmod.info": b"{}"}))
    scan_archive(stream)
    assert stream.was_closed


def test_corrupt_archive_raises_and_closes():
    stream = TrackingStream(b"this is not a zip file")
    with pytest.raises(ArchiveError):
        scan_archive(stream)
    assert stream.was_closed


def test_truncated_archive():
    jar = make_jar({"META-INF/mods.toml": MODS_TOML * 50})
    with pytest.raises(ArchiveError):
        scan_archive(io.BytesIO(jar[: len(jar) - 30]))
