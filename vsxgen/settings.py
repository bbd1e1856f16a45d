from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VSXGEN_", case_sensitive=False)

    template_suffix: str = ".ejs"
    config_filename: str = "config.json"
    glyph_filename: str = "glyph.svg"
    icon_filename: str = "icon.png"
    default_input_dir: Path = Path("./template")
    default_output_dir: Path = Path("./output")
    python_executable: str = sys.executable


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
