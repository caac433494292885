"""
Shared test fixtures: in-memory jars, module descriptors and a fake downloader.
"""

import io
import struct
import zipfile
from typing import Dict, Optional

import pytest


def make_jar(entries: Dict[str, bytes]) -> bytes:
    """Build a zip archive in memory."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as jar:
        for name, data in entries.items():
            jar.writestr(name, data)
    return buffer.getvalue()


def _utf8(text: str) -> bytes:
    raw = text.encode("utf-8")
    return struct.pack(">BH", 1, len(raw)) + raw


def make_module_info(
    name: str = "com.example.mod",
    version: Optional[str] = "1.2.3",
    with_long: bool = False,
) -> bytes:
    """Build a minimal module-info.class."""
    pool = [
        _utf8("module-info"),  # 1
        struct.pack(">BH", 7, 1),  # 2 Class -> #1
        _utf8(name),  # 3
        struct.pack(">BH", 19, 3),  # 4 Module -> #3
        _utf8("Module"),  # 5
    ]
    count = 6
    version_index = 0
    if version is not None:
        pool.append(_utf8(version))  # 6
        version_index = 6
        count = 7
    if with_long:
        # Long takes two slots
        pool.append(struct.pack(">BQ", 5, 42))
        count += 2

    module_body = struct.pack(">HHH", 4, 0, version_index) + struct.pack(
        ">HHHHH", 0, 0, 0, 0, 0
    )
    out = struct.pack(">IHHH", 0xCAFEBABE, 0, 53, count)
    out += b"".join(pool)
    out += struct.pack(">HHH", 0x8000, 2, 0)
    out += struct.pack(">HHH", 0, 0, 0)  # interfaces, fields, methods
    out += struct.pack(">H", 1)
    out += struct.pack(">HI", 5, len(module_body)) + module_body
    return out


MODS_TOML = b"""
modLoader = "javafml"
loaderVersion = "[47,)"

[[mods]]
modId = "examplemod"
version = "1.2.3"
displayName = "Example Mod"
"""

MCMOD_INFO = b"""[
  {
    "modid": "examplemod",
    "name": "Example Mod",
    "version": "1.2.3"
  }
]"""

MANIFEST = (
    b"Manifest-Version: 1.0\r\n"
    b"Implementation-Title: examplemod\r\n"
    b"Implementation-Version: 1.2.3\r\n"
)


class FakeDownloader:
    """Serves jars from memory and counts fetches."""

    def __init__(self, jars: Optional[Dict[str, bytes]] = None):
        self.jars = jars or {}
        self.calls = []

    async def fetch(self, url: str):
        self.calls.append(url)
        return io.BytesIO(self.jars[url])

    async def close(self):
        pass


@pytest.fixture
def downloader():
    return FakeDownloader()
