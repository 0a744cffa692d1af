import os


class Config:
    """Runtime settings for the web application, overridable via environment."""

    HOST = os.environ.get('COURTSIDE_HOST', '127.0.0.1')
    PORT = int(os.environ.get('COURTSIDE_PORT', '7122'))
    # Directory used by the JSON file sink for explicit saves
    SAVE_DIR = os.environ.get('COURTSIDE_SAVE_DIR', 'saves')
    DEFAULT_SPORT = os.environ.get('COURTSIDE_DEFAULT_SPORT', 'basketball')
    LOG_LEVEL = os.environ.get('COURTSIDE_LOG_LEVEL', 'INFO')
    # Set to 0 to disable the background clock thread (tests, headless replays)
    CLOCK_THREAD_ENABLED = os.environ.get('COURTSIDE_CLOCK_THREAD', '1') != '0'
    TESTING = False
