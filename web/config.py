"""
Web server configuration.
"""
from core.config import config, VERSION

# Web server settings
WEB_HOST = config.web.host
WEB_PORT = config.web.port
CORS_ORIGINS = list(config.web.cors_origins)

LOG_LEVEL = config.logging.level
LOG_JSON = config.logging.json_format

__all__ = ["WEB_HOST", "WEB_PORT", "CORS_ORIGINS", "LOG_LEVEL", "LOG_JSON", "VERSION"]
