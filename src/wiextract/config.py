"""Configuration management for the work instruction extractor."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Table classification
    marker_phrase: str = "WORK INSTRUCTION"

    # Batch input
    document_extensions: list[str] = [".doc", ".docx"]
    max_workers: int = 1

    # Batch output routing
    success_dir: str = "Success"
    warnings_dir: str = "SuccessWithWarnings"
    aborted_dir: str = "Aborted"
    result_suffix: str = ".result.json"

    # Logging
    log_level: str = "INFO"

    @property
    def normalized_extensions(self) -> set[str]:
        """Lower-cased extensions, each with a leading dot."""
        return {
            ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            for ext in self.document_extensions
        }

    class Config:
        env_prefix = "WIEXTRACT_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
