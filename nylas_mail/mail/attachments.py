from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(slots=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> "Attachment":
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Attachment not found: {file_path}")

        mime = content_type or (mimetypes.guess_type(file_path.name)[0] or DEFAULT_CONTENT_TYPE)

        return cls(
            filename=filename or file_path.name,
            content=file_path.read_bytes(),
            content_type=mime,
        )

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        *,
        filename: str,
        content_type: str | None = None,
    ) -> "Attachment":
        if not filename:
            raise ValueError("Attachment filename is required when providing raw bytes.")

        return cls(
            filename=filename,
            content=content,
            content_type=content_type or DEFAULT_CONTENT_TYPE,
        )

    @property
    def size(self) -> int:
        return len(self.content)

    def to_payload(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "content_type": self.content_type,
            "size": self.size,
            "content": base64.b64encode(self.content).decode("ascii"),
        }
