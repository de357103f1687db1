from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    port: int = 3000
    log_level: str = "INFO"

    # CORS
    cors_origin: str = "*"

    # Database (plain Postgres URL, e.g. the Supabase connection string)
    database_url: str = ""
    db_auto_create: bool = False

    # LLM providers
    openrouter_api_key: str = ""
    openrouter_model: str = "mistralai/devstral-2512:free"
    bytez_api_key: str = ""
    bytez_model: str = "meta-llama/Llama-3.3-70B-Instruct"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    llm_provider_order: str = "openrouter,bytez,openai,anthropic"
    llm_max_tokens: int = 2000
    llm_temperature: float = 0.7

    # SerpAPI (Google Flights / Google Hotels)
    serpapi_key: str = ""
    serpapi_base_url: str = "https://serpapi.com"

    # Outbound HTTP
    http_timeout_seconds: float = 60.0

    @property
    def provider_order_list(self) -> list[str]:
        return [p.strip().lower() for p in self.llm_provider_order.split(",") if p.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
