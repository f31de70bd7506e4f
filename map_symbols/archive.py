"""
Zip container for generated icons and the downloader that saves it.

Layout inside the archive:
    01_city-hall/0001.png
    01_city-hall/0002.png
    02_police-box/0001.png
    ...
"""
from __future__ import annotations

import asyncio
import io
import re
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

ARCHIVE_PREFIX = "map_symbol_icons"


def slugify(text: str) -> str:
    base = re.sub(r"[^a-zA-Z0-9]+", "-", text).strip("-").lower()
    return base or "category"


def folder_name(ordinal: int, key: str) -> str:
    return f"{ordinal:02d}_{slugify(key)}"


def icon_filename(ordinal: int, extension: str = "png") -> str:
    return f"{ordinal:04d}.{extension}"


def archive_filename(now: Optional[datetime] = None, prefix: str = ARCHIVE_PREFIX) -> str:
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    stamp = re.sub(r"[:.]", "-", stamp)
    return f"{prefix}_{stamp}.zip"


class ArchiveFolder:
    def __init__(self, archive: "ZipArchiveBuilder", name: str) -> None:
        self._archive = archive
        self.name = name

    def file(self, name: str, data: bytes) -> None:
        self._archive.write(f"{self.name}/{name}", data)


class ZipArchiveBuilder:
    """Append-only, single-writer zip held in memory until finalize()."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self._buffer = io.BytesIO()
        self._zip: Optional[zipfile.ZipFile] = zipfile.ZipFile(self._buffer, "w", compression)
        self._entries: list[str] = []
        self._folders: list[str] = []
        self.finalized = False
        self.discarded = False

    def folder(self, name: str) -> ArchiveFolder:
        self._writable()
        if name not in self._folders:
            self._folders.append(name)
        return ArchiveFolder(self, name)

    def write(self, arcname: str, data: bytes) -> None:
        zf = self._writable()
        zf.writestr(arcname, data)
        self._entries.append(arcname)

    def entries(self) -> list[str]:
        return list(self._entries)

    def folder_names(self) -> list[str]:
        return list(self._folders)

    def populated_folders(self) -> list[str]:
        return [name for name in self._folders if any(e.startswith(f"{name}/") for e in self._entries)]

    async def finalize(self) -> bytes:
        zf = self._writable()
        zf.close()
        self._zip = None
        self.finalized = True
        await asyncio.sleep(0)
        return self._buffer.getvalue()

    def discard(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None
        self._buffer = io.BytesIO()
        self.discarded = True

    def _writable(self) -> zipfile.ZipFile:
        if self._zip is None:
            state = "finalized" if self.finalized else "discarded"
            raise RuntimeError(f"archive already {state}")
        return self._zip


class Downloader(Protocol):
    def trigger(self, data: bytes, filename: str) -> None: ...


class DirectoryDownloader:
    def __init__(self, out_dir: Path) -> None:
        self.out_dir = Path(out_dir)
        self.last_path: Optional[Path] = None

    def trigger(self, data: bytes, filename: str) -> None:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        path = self.out_dir / filename
        if path.exists():
            path.unlink()
        path.write_bytes(data)
        self.last_path = path
