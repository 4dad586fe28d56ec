"""Asset capability and its filesystem-backed implementation.

An asset reaches the deployer after the processing pipeline is done with
it. The deployer only reads from it, with one exception: it sets
``output_url`` once the asset is known to be served from the bucket.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from s3deployer.core.hasher import md5_hex, sha1_hex


@runtime_checkable
class Asset(Protocol):
    """What the deployer needs from a processed asset."""

    @property
    def filename(self) -> str:
        """Base name without the extension."""
        ...

    @property
    def extension(self) -> str:
        """Extension without the leading dot; empty when there is none."""
        ...

    @property
    def full_path(self) -> Path:
        ...

    @property
    def modified_timestamp(self) -> int:
        ...

    @property
    def output_url(self) -> str | None:
        ...

    @output_url.setter
    def output_url(self, url: str) -> None:
        ...

    def get_contents(self) -> bytes:
        ...

    def md5(self) -> str:
        ...

    def sha1(self) -> str:
        ...


class FileAsset:
    """An asset backed by a file on disk.

    Contents and digests are read lazily and memoised, so computing an
    object key and uploading the same asset reads the file once.

    Parameters
    ----------
    path:
        Location of the processed file.
    contents:
        Processed bytes, when they differ from what is on disk (e.g. the
        output of an in-memory filter). Defaults to the file contents.
    """

    def __init__(self, path: Path | str, *, contents: bytes | None = None) -> None:
        self._path = Path(path)
        self._contents = contents
        self._md5: str | None = None
        self._sha1: str | None = None
        self._output_url: str | None = None

    @property
    def filename(self) -> str:
        # Only the last suffix counts: "app.min.js" -> ("app.min", "js")
        return self._path.stem if self._path.suffix else self._path.name

    @property
    def extension(self) -> str:
        return self._path.suffix[1:]

    @property
    def full_path(self) -> Path:
        return self._path.resolve()

    @property
    def modified_timestamp(self) -> int:
        return int(self._path.stat().st_mtime)

    @property
    def output_url(self) -> str | None:
        return self._output_url

    @output_url.setter
    def output_url(self, url: str) -> None:
        self._output_url = url

    def get_contents(self) -> bytes:
        if self._contents is None:
            self._contents = self._path.read_bytes()
        return self._contents

    def md5(self) -> str:
        if self._md5 is None:
            self._md5 = md5_hex(self.get_contents())
        return self._md5

    def sha1(self) -> str:
        if self._sha1 is None:
            self._sha1 = sha1_hex(self.get_contents())
        return self._sha1

    def __repr__(self) -> str:
        return f"FileAsset({str(self._path)!r})"
