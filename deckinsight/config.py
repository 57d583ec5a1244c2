from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckInsight"
    debug: bool = False
    log_level: str = "INFO"

    mtggoldfish_url: str = "https://www.mtggoldfish.com"
    moxfield_api_url: str = "https://api.moxfield.com/v2"

    user_agent: str = "DeckInsight/1.0 (Educational deck builder)"
    request_timeout: float = 30.0

    # Minimum seconds between requests to each site
    mtggoldfish_min_interval: float = 0.2
    moxfield_min_interval: float = 0.1

    # Deck pages fetched per MTGGoldfish profile analysis
    profile_decks_to_analyze: int = 5

    # Decks requested per Moxfield profile analysis
    moxfield_page_size: int = 50


settings = Settings()
