from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKDELTA_")

    app_name: str = "DeckDelta"
    debug: bool = False
    log_level: str = "INFO"

    # Largest deck-list text accepted per request field
    max_list_chars: int = 200_000

    # Default for lists without a "Sideboard" header: when True, the first
    # blank line after mainboard cards starts the sideboard
    blank_line_starts_sideboard: bool = False


settings = Settings()
