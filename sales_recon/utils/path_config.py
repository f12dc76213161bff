# -*- coding: utf-8 -*-
"""Centralized configuration for input files and output directory.

Reads pipeline.toml and resolves where each of the four input tables lives
and where results are written, so the orchestrator and CLI never hardcode
file names.
"""

import logging
from pathlib import Path
from typing import List, Optional

import tomllib

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FORMATS = ["csv", "xlsx"]


def get_workspace_root() -> Path:
    """Get the project workspace root directory (parent of sales_recon/)."""
    return Path(__file__).parent.parent.parent


class PathConfig:
    """Centralized path configuration.

    Usage:
        path_config = PathConfig()
        sales_path = path_config.get_source_path("sales")
        output_dir = path_config.output_dir
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize PathConfig from pipeline.toml.

        Args:
            config_path: Path to pipeline.toml. If None, uses default location.

        Raises:
            FileNotFoundError: If config file not found.
        """
        if config_path is None:
            config_path = get_workspace_root() / "pipeline.toml"
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}. "
                "Copy pipeline.toml to the working directory or pass --config."
            )

        with open(config_path, "rb") as f:
            self._config = tomllib.load(f)

        self.config_path = config_path
        self.input_dir = Path(self._config["dirs"]["input"])
        self.output_dir = Path(self._config["dirs"]["output"])

    def source_keys(self) -> List[str]:
        """List the configured input tables."""
        return list(self._config.get("sources", {}).keys())

    def get_source_path(self, source_key: str) -> Path:
        """Get the file path of an input table.

        Args:
            source_key: Source key from pipeline.toml (e.g., "sales").

        Returns:
            Input directory joined with the configured file name.

        Raises:
            KeyError: If source_key not found in config.
        """
        return self.input_dir / self._config["sources"][source_key]["file"]

    def get_source_format(self, source_key: str) -> Optional[str]:
        """Get the declared format of an input table, or None to infer it.

        Raises:
            KeyError: If source_key not found in config.
        """
        return self._config["sources"][source_key].get("format")

    def export_formats(self) -> List[str]:
        """Output formats to write ("csv" and/or "xlsx")."""
        return list(self._config.get("export", {}).get("formats", DEFAULT_EXPORT_FORMATS))

    def lineage_enabled(self) -> bool:
        """Whether the row audit trail is saved next to the results."""
        return bool(self._config.get("export", {}).get("lineage", True))
