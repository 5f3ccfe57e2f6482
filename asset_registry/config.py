"""Configuration management for asset-registry."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from asset_registry.exceptions import ConfigurationError
from asset_registry.units import MAX_PLATFORM_FEE_BPS, WAD


@dataclass
class MarketplaceDefaults:
    """Initial marketplace settings applied when a registry is created."""

    platform_fee_bps: int = 250  # 2.5%
    listing_fee: int = 10 * WAD
    fees_enabled: bool = True
    listing_days: int = 90
    default_whole_asset_shares: int = 100
    share_token_base_uri: str = "https://api.asset-registry.local/token/"
    # Recompute share price as price / total_shares on price updates
    rescale_share_price: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.platform_fee_bps <= MAX_PLATFORM_FEE_BPS:
            raise ConfigurationError(
                f"platform_fee_bps must be within 0..{MAX_PLATFORM_FEE_BPS}, got {self.platform_fee_bps}"
            )
        if self.listing_fee < 0:
            raise ConfigurationError(f"listing_fee must be >= 0, got {self.listing_fee}")
        if self.listing_days <= 0:
            raise ConfigurationError(f"listing_days must be > 0, got {self.listing_days}")
        if self.default_whole_asset_shares <= 0:
            raise ConfigurationError(
                f"default_whole_asset_shares must be > 0, got {self.default_whole_asset_shares}"
            )

    @property
    def listing_seconds(self) -> int:
        """Default listing lifetime in seconds."""
        return self.listing_days * 24 * 60 * 60


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "registry"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class SimulationConfig:
    """Sizing for the sample marketplace simulation."""

    num_assets: int = 20
    num_buyers: int = 10
    purchases_per_asset: int = 5
    fractional_rate: float = 0.6
    whole_asset_rate: float = 0.1
    buyer_funds: int = 5_000_000 * WAD


@dataclass
class RegistrySettings:
    """Main configuration for asset-registry."""

    marketplace: MarketplaceDefaults = field(default_factory=MarketplaceDefaults)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "RegistrySettings":
        """Create settings from environment variables."""
        import os

        try:
            marketplace = MarketplaceDefaults(
                platform_fee_bps=int(os.getenv("PLATFORM_FEE_BPS", "250")),
                listing_fee=int(os.getenv("LISTING_FEE", str(10 * WAD))),
                fees_enabled=os.getenv("FEES_ENABLED", "true").lower() == "true",
                listing_days=int(os.getenv("LISTING_DAYS", "90")),
                share_token_base_uri=os.getenv(
                    "SHARE_TOKEN_BASE_URI", "https://api.asset-registry.local/token/"
                ),
                rescale_share_price=os.getenv("RESCALE_SHARE_PRICE", "true").lower() == "true",
            )
            kafka = KafkaConfig(
                bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
                acks=os.getenv("KAFKA_ACKS", "all"),
                topic_prefix=os.getenv("TOPIC_PREFIX", "registry"),
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            marketplace=marketplace,
            kafka=kafka,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
