from pathlib import Path
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

DEFAULT_CONTENT_PATH = str(Path(__file__).parent / "assets" / "problem_types.yml")


class ProblemTypeSettings(BaseSettings):
    content_path: str = DEFAULT_CONTENT_PATH
    debounce_seconds: float = 0.3
    strict_poles: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix='PROBLEM_TYPE_')


# Instantiate settings
settings = ProblemTypeSettings()
