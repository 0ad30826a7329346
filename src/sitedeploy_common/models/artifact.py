"""Artifact set: the local files placed under the remote document root."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Iterator, Mapping

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class ArtifactFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    content: bytes

    @field_validator("path")
    @classmethod
    def _relative_posix(cls, value: str) -> str:
        p = PurePosixPath(value.replace("\\", "/"))
        if not value or p.is_absolute() or ".." in p.parts or str(p) == ".":
            raise ValueError(f"artifact path must be relative and inside the document root: {value!r}")
        return str(p)


class ArtifactSet(BaseModel):
    """Ordered, read-only collection of files to upload."""

    model_config = ConfigDict(frozen=True)

    files: tuple[ArtifactFile, ...] = ()

    @model_validator(mode="after")
    def _no_duplicates(self) -> "ArtifactSet":
        seen: set[str] = set()
        for f in self.files:
            if f.path in seen:
                raise ValueError(f"duplicate artifact path: {f.path}")
            seen.add(f.path)
        return self

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str | bytes]) -> "ArtifactSet":
        files = []
        for path, content in mapping.items():
            if isinstance(content, str):
                content = content.encode()
            files.append(ArtifactFile(path=path, content=content))
        return cls(files=tuple(files))

    @classmethod
    def from_path(cls, path: Path) -> "ArtifactSet":
        """Load a single file, or every non-hidden file under a directory (sorted)."""
        path = Path(path)
        if path.is_file():
            return cls(files=(ArtifactFile(path=path.name, content=path.read_bytes()),))
        if not path.is_dir():
            raise FileNotFoundError(f"Artifact path not found: {path}")
        files = []
        for child in sorted(path.rglob("*")):
            rel = child.relative_to(path)
            if child.is_dir() or any(part.startswith(".") for part in rel.parts):
                continue
            files.append(ArtifactFile(path=rel.as_posix(), content=child.read_bytes()))
        return cls(files=tuple(files))

    @property
    def total_bytes(self) -> int:
        return sum(len(f.content) for f in self.files)

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[ArtifactFile]:  # type: ignore[override]
        return iter(self.files)
