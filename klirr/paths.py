"""Filesystem helpers for output folders and saved PDFs."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TMP_FILE_FOR_PATH_TO_PDF_ENV = "TMP_FILE_FOR_PATH_TO_PDF"


class OutputDirectoryError(Exception):
    """An output directory could not be created."""


class SavePdfError(Exception):
    """A PDF could not be written to disk."""


def workspace_root() -> Path:
    """The directory that contains this package."""
    return Path(__file__).resolve().parent.parent


def directory_relative_workspace(path: str | os.PathLike[str]) -> Path:
    """A path relative to the workspace root."""
    return workspace_root() / Path(path)


def create_folder_if_needed(path: str | os.PathLike[str]) -> None:
    """Create the directory ``path`` and its parents unless it exists."""
    path = Path(path)
    if path.exists():
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise OutputDirectoryError(f"Failed to create {path}: {error}") from error


def create_folder_to_parent_of_path_if_needed(path: str | os.PathLike[str]) -> None:
    """Create the parent directory of ``path`` unless it exists."""
    parent = Path(path).parent
    create_folder_if_needed(parent)


def create_folder_relative_to_workspace(relative: str | os.PathLike[str]) -> Path:
    """Ensure the parent of ``WORKSPACE_ROOT/relative`` exists and return the path."""
    path = directory_relative_workspace(relative)
    create_folder_to_parent_of_path_if_needed(path)
    return path


def save_pdf_location_to_tmp_file(
    pdf_location: str | os.PathLike[str],
    target: str | os.PathLike[str] | None = None,
) -> None:
    """Write the PDF location into ``target`` so scripts can find the PDF.

    Without a target, the file named by ``TMP_FILE_FOR_PATH_TO_PDF`` is used;
    if that is not set, nothing happens. Write failures are only logged.
    """
    if target is None:
        env_value = os.environ.get(TMP_FILE_FOR_PATH_TO_PDF_ENV)
        if env_value is None:
            return
        target = env_value
    target_path = Path(target)
    logger.debug("Saving path to PDF to temp file '%s'", target_path)
    try:
        target_path.write_text(os.fspath(pdf_location), encoding="utf-8")
    except OSError as error:
        logger.warning(
            "Write to %s: %s (scripts won't find PDF.)", target_path, error
        )


def save_pdf(pdf: bytes, pdf_path: str | os.PathLike[str]) -> Path:
    """Write the PDF bytes to ``pdf_path`` and return that path."""
    output_path = Path(pdf_path)
    logger.info("Saving PDF to: '%s'", output_path)
    try:
        output_path.write_bytes(bytes(pdf))
    except OSError as error:
        raise SavePdfError(f"Write PDF to {output_path}: {error}") from error
    logger.info("Saved PDF to: '%s'", output_path)
    return output_path