from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_NAME: str = "askchart API"
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # LLM providers
    LLM_PROVIDER: str = "openai"  # or "ollama"
    OLLAMA_HOST: str = "http://ollama:11434"
    OLLAMA_MODEL: str = "llama3:8b"
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.groq.com/openai/v1"
    OPENAI_MODEL: str = "llama-3.3-70b-versatile"

    # decoding: keep it cold and short, output is structured
    LLM_TEMPERATURE: float = 0.1
    LLM_TOP_P: float = 0.95
    LLM_MAX_TOKENS_CHART: int = 500
    LLM_MAX_TOKENS_SQL: int = 200

    # resilience
    LLM_TIMEOUT_S: float = 30.0
    LLM_MAX_ATTEMPTS: int = 3
    LLM_BACKOFF_S: float = 0.5

    # DB
    DATABASE_URL: str = "mysql+mysqlconnector://root:@localhost:3306/sales"
    DB_TIMEOUT_S: int = 10
    TARGET_TABLE: str = "sales_data"
    SQL_DIALECT: str = "MySQL"
    PREVIEW_LIMIT: int = 5

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
