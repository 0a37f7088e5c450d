from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    transcription_provider: str = "gemini"

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-3-pro-preview"
    gemini_timeout_seconds: int = 300

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o"
    openai_timeout_seconds: int = 300

    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""
    openai_compatible_base_url: str = ""
    openai_compatible_timeout_seconds: int = 300

    pdf_engine: str = "pymupdf"
    pdf_max_pages: int = 10
    pdf_render_scale: float = 2.0
    pdf_jpeg_quality: int = 80

    docx_max_images: int = 10

    key_poll_interval_seconds: float = 2.0

    output_dir: str = "."
    output_suffix: str = "_PrecisionDigitized"
    figure_fallback_template: str = "[Figure {figure_id}]"
