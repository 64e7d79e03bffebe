"""Parameters for the Fourier filtering pipeline."""

import json
import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Literal, Union

from pydantic import Field, field_validator, model_validator
from pydantic.dataclasses import dataclass

logger = logging.getLogger(__name__)

__all__ = ['FourierParameters', 'load_parameters']


@dataclass
class FourierParameters:
    """
    Settings for the `fourier` mode.

    Cutoffs are radii relative to half of the smaller image side.
    """

    filter_type: Literal["low", "high", "band"] = "low"
    low_cutoff: float = Field(default=0.5, ge=0.0)
    high_cutoff: float = Field(default=0.9, ge=0.0)
    show_fourier_progress: bool = True
    show_fourier_transform_images: bool = True

    @field_validator("filter_type", mode="before")
    @classmethod
    def normalize_filter_type(cls, v):
        """Accept filter names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def check_band_edges(self):
        """A band needs its lower edge at or below its upper edge."""
        if self.filter_type == "band" and self.low_cutoff > self.high_cutoff:
            raise ValueError(
                f"low_cutoff ({self.low_cutoff}) must not exceed high_cutoff ({self.high_cutoff})"
            )
        return self

    def to_dict(self) -> dict:
        return asdict(self)


def load_parameters(config_path: Union[str, Path]) -> FourierParameters:
    """
    Load parameters from a JSON object.

    Keys may be the field names (``low_cutoff``) or the upper-case constant
    style (``LOW_CUTOFF``). Missing keys keep their defaults.

    Args:
        config_path: Path to the JSON file

    Returns:
        Validated FourierParameters

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object or has unknown keys
        pydantic.ValidationError: If a value is out of range
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Parameter file not found: {config_path}")

    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse parameter file {config_path}: {e}")
    if not isinstance(raw, dict):
        raise ValueError(f"Parameter file {config_path} must contain a JSON object")

    known = {f.name for f in fields(FourierParameters)}
    values = {}
    for key, value in raw.items():
        name = key.lower()
        if name not in known:
            raise ValueError(f"Unknown parameter {key!r} in {config_path}")
        values[name] = value

    params = FourierParameters(**values)
    logger.debug(f"Loaded parameters from {config_path}: {params}")
    return params
