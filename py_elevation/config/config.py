import logging
import os
from pathlib import Path
from typing import Literal, MutableMapping, Optional, Tuple, Union

from dotenv import dotenv_values
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / ".env"
ENV_PREFIX = "ELEVATION_"


def load_env_file(
    env_file: Union[str, Path] = ENV_FILE,
    environ: Optional[MutableMapping[str, str]] = None,
) -> int:
    """
    Copy ELEVATION_* entries of a .env file into the environment.

    Variables already present in the environment win over the file.

    Returns:
        Number of variables added
    """
    if environ is None:
        environ = os.environ
    env_file = Path(env_file)
    if not env_file.exists():
        return 0

    file_env = dotenv_values(env_file)
    missing_keys = {
        k: v for k, v in file_env.items()
        if k.upper().startswith(ENV_PREFIX) and k not in environ and v is not None
    }
    for k, v in missing_keys.items():
        environ[k] = v
    return len(missing_keys)

# Explicitly load .env for local runs only if values are missing from the environment
load_env_file()


class Settings(BaseSettings):
    """Application settings pulled from ELEVATION_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "plain"] = Field(default="json", description="Logging format")

    # Sketch Layout Configuration
    sketch_width: int = Field(default=700, gt=0, description="Rendered image width in pixels")
    sketch_padding: int = Field(default=10, ge=0, description="Blank border around the plot area")

    # Fill Configuration
    propagation: Literal["in_place", "double_buffer"] = Field(
        default="in_place", description="Whether same-sweep writes are visible to later cells"
    )
    on_out_of_bounds: Literal["raise", "skip"] = Field(
        default="raise", description="Handling of samples that land outside the grid"
    )
    max_sweeps: Optional[int] = Field(default=None, ge=1, description="Optional cap on fill sweeps")

    # Rendering Configuration
    output_path: str = Field(default="elevation.png", description="Rendered PNG path")
    render_dpi: int = Field(default=100, gt=0, description="Output resolution")
    no_data_color: Tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0), description="RGB color for cells left unknown"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value

# Instantiate singleton settings object
settings = Settings()
