"""Document snapshot state shared by the lint service and the CLI."""

from __future__ import annotations

import hashlib
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_LANGUAGE = "restructuredtext"
BOM = "\ufeff"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _digest(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8"), usedforsecurity=False).hexdigest()


@dataclass(slots=True, frozen=True)
class DocumentVersion:
    """Identity of one text snapshot of a document."""

    document_id: str
    version_id: int
    content_hash: str


@dataclass(slots=True)
class DocumentState:
    """Mutable text buffer with an opaque identity and a version counter."""

    text: str = ""
    language: str = DEFAULT_LANGUAGE
    path: Optional[Path] = None
    dirty: bool = False
    bom: bool = False
    document_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    version_id: int = 1
    content_hash: str = field(default_factory=str)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.content_hash:
            self.content_hash = _digest(self.text)

    @classmethod
    def from_path(cls, path: Path, *, language: str = DEFAULT_LANGUAGE, encoding: str = "utf-8") -> DocumentState:
        """Load ``path`` keeping its line endings intact.

        A leading byte order mark is not part of the text; it is remembered in
        :attr:`bom` and written back by :meth:`save`.
        """

        with path.open("r", encoding=encoding, newline="") as handle:
            text = handle.read()
        bom = text.startswith(BOM)
        if bom:
            text = text[len(BOM) :]
        return cls(text=text, language=language, path=path, bom=bom, document_id=str(path.resolve()))

    def update_text(self, new_text: str) -> None:
        """Replace the text, bump the version and mark the buffer dirty."""

        self.text = new_text
        self.dirty = True
        self.updated_at = _utcnow()
        self.version_id += 1
        self.content_hash = _digest(new_text)

    def save(self, *, encoding: str = "utf-8") -> Path:
        """Write the text back to :attr:`path` atomically."""

        if self.path is None:
            raise ValueError("Document has no path to save to")
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with tmp_path.open("w", encoding=encoding, newline="") as handle:
            if self.bom:
                handle.write(BOM)
            handle.write(self.text)
        tmp_path.replace(self.path)
        self.dirty = False
        return self.path

    def version_info(self) -> DocumentVersion:
        return DocumentVersion(
            document_id=self.document_id,
            version_id=self.version_id,
            content_hash=self.content_hash,
        )

    def snapshot(self) -> Dict[str, Any]:
        """Return a serializable description of the buffer."""

        payload: Dict[str, Any] = {
            "document_id": self.document_id,
            "version_id": self.version_id,
            "content_hash": self.content_hash,
            "language": self.language,
            "dirty": self.dirty,
            "bom": self.bom,
        }
        if self.path:
            payload["path"] = str(self.path)
        return payload


__all__ = ["BOM", "DEFAULT_LANGUAGE", "DocumentState", "DocumentVersion"]
