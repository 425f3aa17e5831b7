"""Network configuration constants for the quiz stats service."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
FEED_TIMEOUT_SECONDS: float | None = 30.0
