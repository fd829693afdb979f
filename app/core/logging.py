import logging
import sys

from app.core.config import settings

# ==== Logging ====
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def setup_logging() -> None:
    """Root logger a stdout con el nivel de LOG_LEVEL (basicConfig no pisa handlers ya configurados)."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT, stream=sys.stdout)

    # httpx loguea cada request del SDK de OpenAI en INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
