"""Local file storage for profile uploads."""

from __future__ import annotations

import logging
import secrets
from pathlib import Path, PurePosixPath

from dypse_api.config import get_settings

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


def _get_upload_root() -> Path:
    root = Path(get_settings().upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def build_stored_name(original_filename: str) -> str:
    """Return a collision-resistant file name that keeps the original extension."""

    suffix = PurePosixPath(original_filename or "").suffix.lower()
    return f"{secrets.token_hex(12)}{suffix}"


def save_upload(folder: str, stored_name: str, data: bytes) -> str:
    """Write ``data`` under ``folder`` and return its public URL path."""

    directory = _get_upload_root() / folder
    directory.mkdir(parents=True, exist_ok=True)
    (directory / stored_name).write_bytes(data)
    return f"{UPLOADS_URL_PREFIX}/{folder}/{stored_name}"


def delete_upload(url: str | None) -> None:
    """Delete the file previously returned by :func:`save_upload`, if it still exists."""

    if not url or not url.startswith(f"{UPLOADS_URL_PREFIX}/"):
        return
    relative = PurePosixPath(url[len(UPLOADS_URL_PREFIX) + 1 :])
    if ".." in relative.parts:
        logger.warning("Refusing to delete upload outside the upload root: %s", url)
        return
    try:
        (_get_upload_root() / Path(*relative.parts)).unlink()
    except FileNotFoundError:
        return


__all__ = ["UPLOADS_URL_PREFIX", "build_stored_name", "delete_upload", "save_upload"]
