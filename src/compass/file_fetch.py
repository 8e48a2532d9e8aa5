from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import quote

from .exceptions import CompassDownloadError

if TYPE_CHECKING:  # pragma: no cover
    from .session import Compass

logger = logging.getLogger(__name__)

__all__ = ["download_file", "save_file", "check_target"]

PATH_DOWNLOAD_FILE = "/services/FileDownload/FileRequestHandler"


def download_file(client: Compass, file_id: str) -> bytes:
    """Fetch a file attachment and return its bytes unmodified."""
    path = f"{PATH_DOWNLOAD_FILE}?FileDownloadType=1&file={quote(str(file_id), safe='')}"
    logger.info(f"Downloading file {file_id}")
    return client.get(path)


def check_target(target_path: str | Path, overwrite: bool = False) -> Path:
    """Checks that a download can be written to `target_path` without fetching anything."""
    target_filepath = Path(target_path)

    if not target_filepath.parent.exists():
        raise FileNotFoundError(f"Target directory does not exist: {target_filepath.parent}")
    if target_filepath.is_dir():
        raise ValueError("target_path must be a full file path, not a directory.")
    if target_filepath.exists() and not overwrite:
        raise CompassDownloadError(f"Target file already exists and overwrite is False: {target_filepath}")

    return target_filepath


def save_file(client: Compass, file_id: str, target_path: str | Path, overwrite: bool = False) -> Path:
    """
    Downloads a file attachment and writes it to `target_path`.

    Args:
        client: A logged-in session client.
        file_id: The Compass id of the file.
        target_path: The local file path (including filename) to write to.
        overwrite: If True, overwrite the target file if it already exists.

    Returns:
        The Path object representing the downloaded file.

    Raises:
        CompassDownloadError: If the file exists and overwrite is False, or writing fails.
        FileNotFoundError: If the target directory does not exist.
        ValueError: If target_path is a directory.
    """
    target_filepath = check_target(target_path, overwrite=overwrite)

    content = download_file(client, file_id)

    try:
        target_filepath.write_bytes(content)
    except OSError as e:
        # Clean up potentially partially written file
        if target_filepath.exists():
            try:
                target_filepath.unlink()
            except OSError:
                logger.warning(f"Could not remove partially written file: {target_filepath}")
        raise CompassDownloadError(f"Failed to write file {file_id} to {target_filepath}: {e}") from e

    logger.info(f"Saved file {file_id} to {target_filepath} ({len(content)} bytes)")
    return target_filepath
