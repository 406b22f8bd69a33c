from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Get the project root directory (parent of backend folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    model_config = SettingsConfigDict(env_file=str(PROJECT_ROOT / ".env"), extra="ignore")

    # AI Provider Configuration
    ai_provider: str = "groq"  # "groq", "ollama" or "claude"

    # Groq settings (hosted, default)
    groq_api_key: str = ""
    groq_model: str = "mixtral-8x7b-32768"

    # Ollama settings (for local development)
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:latest"

    # Claude API settings
    claude_api_key: str = ""
    claude_model: str = "claude-3-5-sonnet-20241022"

    # Generation parameters, identical for every provider
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000

    # Where the Streamlit client finds the API
    api_base_url: str = "http://localhost:8000"

    log_level: str = "INFO"

    @property
    def active_model(self) -> str:
        """Model identifier of the configured provider"""
        provider = self.ai_provider.lower()
        if provider == "claude":
            return self.claude_model
        if provider == "ollama":
            return self.ollama_model
        return self.groq_model

settings = Settings()
