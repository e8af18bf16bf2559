"""
Runtime configuration read from the Lambda environment.
"""

import os
import logging


def int_from_env(name, default):
    """
    Read a positive integer setting, falling back to the default

    Args:
        name: Environment variable name
        default: Value used when the variable is unset or not a positive integer

    Returns:
        Integer setting
    """
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value <= 0:
        logging.getLogger(__name__).warning(
            f"Ignoring {name}={raw!r}: must be positive, using {default}")
        return default
    return value


MODEL_ID = os.environ.get('MODEL_ID', 'amazon.titan-text-express-v1')
BEDROCK_REGION = os.environ.get('BEDROCK_REGION') or os.environ.get('AWS_REGION', 'us-east-1')

# Seconds
BEDROCK_READ_TIMEOUT = int_from_env('BEDROCK_READ_TIMEOUT', 60)
BEDROCK_CONNECT_TIMEOUT = int_from_env('BEDROCK_CONNECT_TIMEOUT', 10)

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': '*',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET'
}

PREFLIGHT_BODY = 'Preflight OK'


def configure_logging():
    """
    Set up the root logger the way the Lambda Python runtime expects

    Returns:
        The configured root logger
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return logger
