from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Consolidator settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="RMRK_")

    app_name: str = "rmrk-consolidator"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./rmrk.db"

    # SS58 network prefix used to re-encode payment destinations on BUY
    # (2 = Kusama). None compares the raw transfer destination.
    address_format: int | None = None

    # Log EMOTE events in the NFT 'changes' audit list
    emit_emote_changes: bool = False

    # Return an ordered {op_type: id} list of applied interactions
    emit_interaction_changes: bool = False


settings = Settings()


# =============================================================================
# PROTOCOL CONSTANTS
# =============================================================================

REMARK_PREFIX = "RMRK"
REMARK_VERSION = "1.0.0"
REMARK_SEPARATOR = "::"

# Joins multiple system.remark burn reasons found in a CONSUME batch
CONSUME_SEPARATOR = "<consume_sep>"

# Burn reason recorded when the CONSUME carries none
DEFAULT_BURN_REASON = "true"
