import logging

from services.common.core.logging_config import setup_logging as common_setup_logging

from ..config import ProxyConfig


def setup_logging(config: ProxyConfig):
    """
    Load the YAML config and initialize logging.
    """
    common_setup_logging(config.LOG_CONFIG_PATH, log_level=config.LOG_LEVEL)
    logging.getLogger("api_proxy").debug("Logging configured from %s", config.LOG_CONFIG_PATH)
