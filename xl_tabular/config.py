"""
Build configuration and YAML I/O for xl-tabular.

``BuildOptions`` holds every knob of a build pass:

- ``sheet_name``: worksheet to read (default ``"Sheet1"``).
- ``has_headers``: when True the first row becomes ``Table.header`` and
  data starts at the second row; when False every row is data.
- ``wide_integers``: policy for integers outside the 32-bit range.

Options can be persisted to a small YAML file so a build is reproducible
(``load_config`` / ``save_config``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from xl_tabular.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Sheet1"


class BuildOptions(BaseModel):
    """Options for one table build."""

    sheet_name: str = Field(
        DEFAULT_SHEET_NAME, description="Worksheet to read rows from"
    )
    has_headers: bool = Field(
        False,
        description="If True, the first row is split off as the table header",
    )
    wide_integers: Literal["text", "float", "drop"] = Field(
        "text",
        description=(
            "Integers outside the 32-bit range: keep as text, convert to "
            "float, or drop (empty cell)"
        ),
    )

    @field_validator("sheet_name")
    @classmethod
    def _check_sheet_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("sheet_name must not be blank")
        return value


def load_config(path: str | Path) -> BuildOptions:
    """Load and validate build options from YAML.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or not a mapping.
        pydantic.ValidationError: If the content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file must contain a mapping, got {type(raw).__name__}: {path}"
        )
    logger.info("Loaded config from %s", path)
    return BuildOptions.model_validate(raw)


def save_config(options: BuildOptions, path: str | Path) -> None:
    """Serialize build options to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = options.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# xl-tabular build configuration\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
