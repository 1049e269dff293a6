"""
Caption Editor configuration
Reads settings from the environment (.env supported) into a validated model
"""
import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class EditorConfig(BaseModel):
    """Runtime settings for the caption editor host"""
    secret_key: str = Field("your-secret-key-change-this", description="Flask session secret")
    port: int = Field(5000, ge=1, le=65535, description="HTTP port")
    debug: bool = Field(False, description="Flask debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field("INFO", description="Root logging level")
    track_label: str = Field("English", min_length=1, description="Label of the exported subtitle track")
    track_srclang: str = Field("en", min_length=1, description="Language tag of the exported subtitle track")
    testing: bool = False

    @classmethod
    def from_env(cls) -> 'EditorConfig':
        return cls(
            secret_key=os.getenv('SECRET_KEY', 'your-secret-key-change-this'),
            port=int(os.getenv('PORT', '5000')),
            debug=os.getenv('FLASK_DEBUG', 'false').lower() == 'true',
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            track_label=os.getenv('TRACK_LABEL', 'English'),
            track_srclang=os.getenv('TRACK_SRCLANG', 'en'),
        )


def load_config(overrides: Optional[dict] = None) -> EditorConfig:
    """Environment settings with optional overrides (used by tests)"""
    config = EditorConfig.from_env()
    if overrides:
        config = config.model_copy(update=overrides)
    return config
