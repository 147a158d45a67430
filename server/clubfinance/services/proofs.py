"""Validation for proof attachments stored inline as data URLs."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

from clubfinance.core.config import settings

_DATA_URL_RE = re.compile(r"^data:(?P<media>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)
ALLOWED_PDF_TYPE = "application/pdf"


def _allowed_media_type(media_type: str) -> bool:
    return media_type.startswith("image/") or media_type == ALLOWED_PDF_TYPE


def validate_proof(value: Optional[str]) -> Optional[str]:
    """Return the proof unchanged when it is an image/PDF data URL within the size limit.

    Empty strings are normalised to ``None`` so forms can clear an attachment.
    """

    if value is None or not value.strip():
        return None
    match = _DATA_URL_RE.match(value.strip())
    if not match:
        raise ValueError("Proof must be a base64 data URL")
    media_type = match.group("media").lower()
    if not _allowed_media_type(media_type):
        raise ValueError("Proof must be an image or a PDF document")
    try:
        raw = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Proof payload is not valid base64") from exc
    if len(raw) > settings.MAX_PROOF_SIZE_MB * 1024 * 1024:
        raise ValueError(f"Proof exceeds {settings.MAX_PROOF_SIZE_MB} MB")
    return value.strip()
