"""Reading and writing data files in the data directory."""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from pathlib import Path
from typing import Any

import platformdirs

from klirr.paths import create_folder_if_needed

logger = logging.getLogger(__name__)

BINARY_NAME = "klirr"
DATA_FILE_EXTENSION = ".json"

DATA_FILE_NAME_VENDOR = "vendor"
DATA_FILE_NAME_CLIENT = "client"
DATA_FILE_NAME_PAYMENT = "payment"
DATA_FILE_NAME_SERVICE_FEES = "service_fees"
DATA_FILE_NAME_PROTO_INVOICE_INFO = "invoice_info"
DATA_FILE_NAME_EXPENSES = "expenses"
DATA_FILE_NAME_CACHED_RATES = "cached_rates"


class StorageError(Exception):
    """Data could not be serialized, written, read or parsed."""


def data_dir(create_if_not_exists: bool = False) -> Path:
    """The data directory, e.g. ``~/.local/share/klirr/data`` on Linux.

    Creates it when ``create_if_not_exists`` is true and it is missing.
    """
    directory = Path(platformdirs.user_data_dir()) / BINARY_NAME / "data"
    if create_if_not_exists:
        create_folder_if_needed(directory)
    return directory


def path_to_data_file(base_path: str | os.PathLike[str], name: str) -> Path:
    """The path of the data file called ``name`` inside ``base_path``."""
    return Path(base_path) / f"{name}{DATA_FILE_EXTENSION}"


def _to_plain(model: Any) -> Any:
    to_dict = getattr(model, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(model) and not isinstance(model, type):
        return dataclasses.asdict(model)
    return model


def save_to_disk(model: Any, path: str | os.PathLike[str]) -> None:
    """Serialize ``model`` as pretty JSON and write it to ``path``."""
    try:
        serialized = json.dumps(_to_plain(model), indent=4, ensure_ascii=False)
    except (TypeError, ValueError) as error:
        raise StorageError(
            f"Failed to serialize {type(model).__name__}: {error}"
        ) from error
    target = Path(path)
    try:
        target.write_text(serialized, encoding="utf-8")
    except OSError as error:
        raise StorageError(f"Failed to write data to {target}: {error}") from error
    logger.info("Successfully saved file at: %s", target)


def load_data(base_path: str | os.PathLike[str], name: str) -> Any:
    """Read and parse the data file called ``name`` inside ``base_path``."""
    path = path_to_data_file(base_path, name)
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as error:
        raise StorageError(f"Failed to read {path}: {error}") from error
    try:
        return json.loads(contents)
    except json.JSONDecodeError as error:
        raise StorageError(f"Failed to parse {path}: {error}") from error