"""
Environment configuration module
Loads and validates all interpreter settings.
"""

import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load .env file (for local development)
load_dotenv()

_DATA_DIR = Path(__file__).resolve().parent / "data"

# Currency / parsing settings
DEFAULT_CURRENCY = os.getenv('DEFAULT_CURRENCY', 'USD').strip().upper()
CURRENCY_CATALOG_PATH = os.getenv('CURRENCY_CATALOG_PATH') or str(_DATA_DIR / "currencies.yaml")
KEYWORDS_PATH = os.getenv('KEYWORDS_PATH') or str(_DATA_DIR / "keywords.yaml")
PARSE_NUMBER_WORDS = os.getenv('PARSE_NUMBER_WORDS', 'true').strip().lower() in ('1', 'true', 'yes', 'on')

# Timezone that anchors "now" for relative dates ("yesterday")
TIMEZONE = os.getenv('TIMEZONE', 'UTC').strip()

# Auto-trigger coordinator
_RAW_AUTO_TRIGGER_DELAY = os.getenv('AUTO_TRIGGER_DELAY_SECONDS', '0.5')
_RAW_MAX_AMOUNT = os.getenv('MAX_AMOUNT', '999999.99')

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').strip().upper()

invalid_vars = []

try:
    MAX_AMOUNT = Decimal(_RAW_MAX_AMOUNT)
    if not MAX_AMOUNT.is_finite() or MAX_AMOUNT <= 0:
        raise InvalidOperation
except InvalidOperation:
    MAX_AMOUNT = None
    invalid_vars.append('MAX_AMOUNT')

try:
    AUTO_TRIGGER_DELAY_SECONDS = float(_RAW_AUTO_TRIGGER_DELAY)
    if AUTO_TRIGGER_DELAY_SECONDS < 0:
        raise ValueError
except ValueError:
    AUTO_TRIGGER_DELAY_SECONDS = None
    invalid_vars.append('AUTO_TRIGGER_DELAY_SECONDS')

try:
    ZoneInfo(TIMEZONE)
except (ZoneInfoNotFoundError, ValueError):
    invalid_vars.append('TIMEZONE')

if len(DEFAULT_CURRENCY) != 3 or not DEFAULT_CURRENCY.isalpha():
    invalid_vars.append('DEFAULT_CURRENCY')

if LOG_LEVEL not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
    invalid_vars.append('LOG_LEVEL')

if invalid_vars:
    raise ValueError(f"Invalid environment variables: {', '.join(invalid_vars)}")
