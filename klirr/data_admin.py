"""Selecting and mutating stored data files."""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable
from typing import Any

from klirr.storage import load_data, path_to_data_file, save_to_disk

logger = logging.getLogger(__name__)


class DataSelector(enum.Enum):
    """Which part of the stored data to edit."""

    ALL = "all"
    """Everything except the expensed months."""
    VENDOR = "vendor"
    CLIENT = "client"
    INFORMATION = "information"
    PAYMENT_INFO = "payment-info"
    SERVICE_FEES = "service-fees"

    def includes(self, target: DataSelector) -> bool:
        """Whether selecting ``self`` covers ``target``."""
        return self is DataSelector.ALL or self is target


def mutate_data_file(
    data_path: str | os.PathLike[str],
    name: str,
    mutate: Callable[[Any], Any],
) -> Any:
    """Load the data file ``name``, apply ``mutate`` and save it back.

    ``mutate`` may change the loaded value in place and return None, or
    return a replacement value. The saved value is returned.
    """
    data = load_data(data_path, name)
    replacement = mutate(data)
    if replacement is not None:
        data = replacement
    save_to_disk(data, path_to_data_file(data_path, name))
    logger.debug("Updated data file %r in %s", name, data_path)
    return data