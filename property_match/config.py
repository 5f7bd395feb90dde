"""Configuration management for property-match."""

from dataclasses import dataclass, field
from typing import Any

from property_match.exceptions import ConfigurationError

NOTIFY_BACKENDS = ("console", "kafka", "none")


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "listings"
    user: str = "postgres"
    password: str = "postgres"
    sslmode: str = "prefer"
    connect_timeout: int = 10
    url: str | None = None  # Full DSN; overrides the individual fields

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        if self.url:
            return self.url
        return (
            f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
            f"?sslmode={self.sslmode}&connect_timeout={self.connect_timeout}"
        )


@dataclass
class KafkaConfig:
    """Kafka producer configuration for outbound notifications."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 5
    retries: int = 3
    topic_prefix: str = "marketplace.notifications"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "retries": self.retries,
        }


@dataclass
class NotificationConfig:
    """Where notifications go and who receives admin alerts."""

    backend: str = "console"
    admin_email: str = "info@netivon.com"
    sender: str = "contact@dykeinvestments.com"

    def __post_init__(self) -> None:
        if self.backend not in NOTIFY_BACKENDS:
            raise ConfigurationError(
                f"Unknown notification backend {self.backend!r}; expected one of {NOTIFY_BACKENDS}"
            )


@dataclass
class ListingConfig:
    """Listing defaults."""

    default_limit: int = 100
    recent_days: int = 30


@dataclass
class AppConfig:
    """Main configuration for property-match."""

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    listings: ListingConfig = field(default_factory=ListingConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        import os

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_int_env("POSTGRES_PORT", "5432"),
            database=os.getenv("POSTGRES_DB", "listings"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            sslmode=os.getenv("POSTGRES_SSLMODE", "prefer"),
            connect_timeout=_int_env("POSTGRES_CONNECT_TIMEOUT", "10"),
            url=os.getenv("DATABASE_URL") or None,
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic_prefix=os.getenv("KAFKA_TOPIC_PREFIX", "marketplace.notifications"),
        )

        notifications = NotificationConfig(
            backend=os.getenv("NOTIFY_BACKEND", "console").lower(),
            admin_email=os.getenv("ADMIN_EMAIL", "info@netivon.com"),
            sender=os.getenv("NOTIFY_SENDER", "contact@dykeinvestments.com"),
        )

        listings = ListingConfig(
            default_limit=_int_env("LISTING_LIMIT", "100"),
            recent_days=_int_env("RECENT_DAYS", "30"),
        )

        return cls(
            postgres=postgres,
            kafka=kafka,
            notifications=notifications,
            listings=listings,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _int_env(name: str, default: str) -> int:
    import os

    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
