"""
Configuration module for SeerrIssue
Loads environment variables and provides configuration values
"""
import os
import sys
from datetime import datetime
from dotenv import load_dotenv
from loguru import logger

# Configure loguru
logger.remove()  # Remove default handler
logger.add(os.getenv("LOG_FILE", "logs/seerrissue.log"), rotation="500 MB", encoding='utf-8')
logger.add(sys.stdout, colorize=True)
logger.level("WARNING", color="<cyan>")

# Initialize variables
OVERSEERR_BASE = None
OVERSEERR_API_BASE_URL = None
OVERSEERR_API_KEY = None
OVERSEERR_API_USER = None
REQUEST_TIMEOUT = 10.0

START_TIME = datetime.now()

def load_config(override=False):
    """Load configuration from environment variables"""
    global OVERSEERR_BASE, OVERSEERR_API_BASE_URL, OVERSEERR_API_KEY
    global OVERSEERR_API_USER, REQUEST_TIMEOUT

    load_dotenv(override=override)

    OVERSEERR_BASE = os.getenv('OVERSEERR_BASE')
    if OVERSEERR_BASE:
        OVERSEERR_BASE = OVERSEERR_BASE.rstrip('/')
    OVERSEERR_API_BASE_URL = f"{OVERSEERR_BASE}/api/v1" if OVERSEERR_BASE else None
    OVERSEERR_API_KEY = os.getenv('OVERSEERR_API_KEY')

    # Reports are filed as this user unless a request names one
    api_user = os.getenv('OVERSEERR_API_USER')
    try:
        OVERSEERR_API_USER = int(api_user) if api_user else None
    except ValueError:
        logger.error(f"OVERSEERR_API_USER ({api_user}) is not a valid user id. Reporting as the API key owner.")
        OVERSEERR_API_USER = None

    try:
        REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))
        min_timeout = 1.0  # Minimum timeout in seconds
        if REQUEST_TIMEOUT < min_timeout:
            logger.warning(f"REQUEST_TIMEOUT ({REQUEST_TIMEOUT}) is too small. Setting to minimum timeout of {min_timeout} seconds.")
            REQUEST_TIMEOUT = min_timeout
    except (TypeError, ValueError):
        logger.error("REQUEST_TIMEOUT environment variable is not a valid number. Using default of 10 seconds.")
        REQUEST_TIMEOUT = 10.0

    if not OVERSEERR_API_BASE_URL:
        logger.error("OVERSEERR_BASE environment variable is not set.")
        return False

    if not OVERSEERR_API_KEY:
        logger.error("OVERSEERR_API_KEY environment variable is not set.")
        return False

    return True

# Initialize configuration
load_config()
