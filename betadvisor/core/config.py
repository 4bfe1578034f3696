from decimal import Decimal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .decimalutils import q_odds
from .logger import get_logger

CHAIN_POLYGON_MAINNET = "polygon-mainnet"
CHAIN_POLYGON_TESTNET = "polygon-testnet"
DICTIONARY_MODES = {"dictionary", "fallback"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field("dev", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    chain: str = Field(CHAIN_POLYGON_MAINNET, alias="CHAIN")
    mainnet_graph_url: str = Field(
        "https://thegraph.azuro.org/subgraphs/name/azuro-protocol/azuro-api-polygon-v3",
        alias="MAINNET_GRAPH_URL",
    )
    testnet_graph_url: str = Field(
        "https://thegraph.azuro.org/subgraphs/name/azuro-protocol/azuro-api-polygon-amoy-dev-v3",
        alias="TESTNET_GRAPH_URL",
    )
    game_api_url: str = Field(
        "https://api.azuro.org/graphql/subgraph/polygon-mumbai",
        alias="GAME_API_URL",
    )
    http_timeout_seconds: float = Field(default=20.0, alias="HTTP_TIMEOUT_SECONDS")

    sport_name: str = Field("Football", alias="SPORT_NAME")
    min_odds: Decimal = Field(Decimal("1.2"), alias="MIN_ODDS")
    match_time_window_seconds: int = Field(default=86400, alias="MATCH_TIME_WINDOW_SECONDS")

    # "dictionary" uses the outcome dictionary tables; "fallback" the degraded hard-coded maps.
    dictionary_mode: str = Field("dictionary", alias="DICTIONARY_MODE")
    # Optional JSON file replacing the bundled outcome table.
    dictionary_path: str = Field("", alias="DICTIONARY_PATH")

    output_dir: str = Field("data/matches", alias="OUTPUT_DIR")
    match_report_tz_offset_hours: int = Field(default=3, alias="MATCH_REPORT_TZ_OFFSET_HOURS")

    @model_validator(mode="after")
    def validate_modes(self):
        logger = get_logger("settings")
        mode = (self.dictionary_mode or "").strip().lower()
        if mode not in DICTIONARY_MODES:
            logger.warning("DICTIONARY_MODE=%r is not supported; using 'dictionary'", self.dictionary_mode)
            mode = "dictionary"
        self.dictionary_mode = mode

        chain = (self.chain or "").strip().lower()
        if chain not in {CHAIN_POLYGON_MAINNET, CHAIN_POLYGON_TESTNET}:
            logger.warning("CHAIN=%r is not supported; using %s", self.chain, CHAIN_POLYGON_MAINNET)
            chain = CHAIN_POLYGON_MAINNET
        self.chain = chain
        return self

    @property
    def graph_url(self) -> str:
        if self.chain == CHAIN_POLYGON_TESTNET:
            return self.testnet_graph_url
        return self.mainnet_graph_url

    @property
    def min_odds_dec(self) -> Decimal:
        return q_odds(self.min_odds)

    @property
    def use_fallback_dictionary(self) -> bool:
        return self.dictionary_mode == "fallback"


default_settings = Settings()
settings = default_settings
