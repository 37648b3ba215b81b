"""Application configuration via environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    http_addr: str = "0.0.0.0:8080"
    app_mode: str = Field(
        default="release",  # debug / release / test
        validation_alias=AliasChoices("app_mode", "gin_mode"),
    )
    log_level: str = "INFO"

    # Videos
    video_root_path: str = ""
    strict_paths: bool = False  # also confine resolved stream paths to the root

    # Frontend
    ui_dir: str = ""  # directory overriding the packaged SPA assets
    enable_docs: bool = False

    model_config = {"env_prefix": "", "env_file": ".env"}

    @property
    def video_enabled(self) -> bool:
        return bool(self.video_root_path)

    @property
    def docs_enabled(self) -> bool:
        return self.app_mode == "debug" or self.enable_docs


settings = Settings()
