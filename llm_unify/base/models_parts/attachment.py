"""
Attachment DTO for user message content.

An attachment is either inline base64 data with a MIME type or a URL
reference (``content_type == "url"``). Adapters translate attachments into
the service's image/document content parts.
"""
from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

URL_CONTENT_TYPE = "url"


@dataclass(frozen=True)
class Attachment:
    """A binary or URL attachment sent alongside user text.

    Attributes:
        data: Base64 payload, or the URL when ``content_type`` is ``"url"``.
        content_type: MIME type such as ``"image/png"`` or the ``"url"`` marker.
    """

    data: str
    content_type: str

    @classmethod
    def from_base64(cls, data: str, content_type: str) -> "Attachment":
        return cls(data=data, content_type=content_type)

    @classmethod
    def from_url(cls, url: str) -> "Attachment":
        return cls(data=url, content_type=URL_CONTENT_TYPE)

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: str | None = None) -> "Attachment":
        """Read a local file and encode it as base64.

        The MIME type is guessed from the file extension when not given and
        falls back to ``application/octet-stream``.
        """
        p = Path(path)
        guessed = content_type or mimetypes.guess_type(p.name)[0] or "application/octet-stream"
        return cls(data=base64.b64encode(p.read_bytes()).decode("ascii"), content_type=guessed)

    @property
    def is_url(self) -> bool:
        return self.content_type == URL_CONTENT_TYPE

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @property
    def is_document(self) -> bool:
        return self.content_type == "application/pdf"

    def data_url(self) -> str:
        """Return a ``data:`` URL for inline payloads, or the URL itself."""
        if self.is_url:
            return self.data
        return f"data:{self.content_type};base64,{self.data}"

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "content_type": self.content_type}


__all__ = ["Attachment", "URL_CONTENT_TYPE"]
