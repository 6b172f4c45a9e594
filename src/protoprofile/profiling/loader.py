"""Profile loading module.

Reads a field access profile from YAML or JSON, validates it against the
bundled JSON Schema and returns the typed AccessInfo model.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema import ValidationError
from pydantic import ValidationError as ModelValidationError

from protoprofile.errors import ProfileLoadError, ProfileNotFoundError, ProfileParseError
from protoprofile.profiling.types import AccessInfo

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "access_info.schema.json"


class AccessInfoLoader:
    """Loads and validates profile datasets."""

    def __init__(self, schema_path: Path | None = None) -> None:
        """Initialize loader with the profile schema.

        Args:
        ----
            schema_path: Path to the profile JSON Schema file. If None, uses default.

        """
        self.logger = logging.getLogger(self.__class__.__name__)

        if schema_path is None:
            schema_path = DEFAULT_SCHEMA_PATH

        if not schema_path.exists():
            msg = f"Profile schema file not found: {schema_path}"
            raise FileNotFoundError(msg)

        with schema_path.open(encoding="utf-8") as f:
            self.schema = json.load(f)

        self.validator = jsonschema.Draft7Validator(self.schema)

    def load(self, profile_path: str | Path) -> AccessInfo:
        """Load a profile dataset from disk.

        Files ending in ``.json`` are parsed as JSON, everything else as YAML.

        Args:
        ----
            profile_path: Path to the profile file

        Returns:
        -------
            Validated AccessInfo

        Raises:
        ------
            ProfileNotFoundError: If the file doesn't exist
            ProfileParseError: If the file is not valid YAML/JSON or fails validation
            ProfileLoadError: If the file exists but cannot be read

        """
        path = Path(profile_path)
        if not path.is_file():
            msg = f"Profile not found: {path}"
            raise ProfileNotFoundError(msg)

        try:
            with path.open(encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            msg = f"Failed to parse profile {path}: {e}"
            raise ProfileParseError(msg) from e
        except OSError as e:
            msg = f"Failed to read profile {path}: {e}"
            raise ProfileLoadError(msg) from e

        access_info = self.parse_data(data, source_name=str(path))
        self.logger.info(
            f"Loaded profile {path} with {len(access_info.messages)} messages"
        )
        return access_info

    def parse_data(self, data: Any, source_name: str = "profile data") -> AccessInfo:
        """Validate raw profile data and convert it to AccessInfo.

        Args:
        ----
            data: Decoded YAML/JSON document
            source_name: Name/path for error messages

        Returns:
        -------
            Validated AccessInfo

        Raises:
        ------
            ProfileParseError: If the data does not match the profile schema

        """
        if data is None:
            msg = f"Profile {source_name} is empty"
            raise ProfileParseError(msg)

        errors = sorted(self.validator.iter_errors(data), key=lambda e: list(e.path))
        if errors:
            messages = [self._format_error(e) for e in errors]
            msg = f"Schema validation failed for {source_name}: {messages[0]}"
            raise ProfileParseError(msg, messages)

        try:
            return AccessInfo(**data)
        except ModelValidationError as e:
            msg = f"Invalid profile {source_name}: {e}"
            raise ProfileParseError(msg) from e

    @staticmethod
    def _format_error(error: ValidationError) -> str:
        message = error.message
        if error.absolute_path:
            message += f" at path: {'.'.join(str(p) for p in error.absolute_path)}"
        return message


def load_access_info(profile_path: str | Path) -> AccessInfo:
    """Load a profile dataset with the default schema."""
    return AccessInfoLoader().load(profile_path)
