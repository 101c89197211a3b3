"""Logging setup, called once from the application lifespan."""
import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger (no-op for handlers if one is already attached)."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))
