"""Configuration loading from environment variables and defaults."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

# Table
DEFAULT_PLAYER_COUNT = int(os.getenv("HOLDEM_PLAYERS", "4"))
DEFAULT_STARTING_CHIPS = int(os.getenv("HOLDEM_STARTING_CHIPS", "1000"))

# Blinds default
DEFAULT_SMALL_BLIND = int(os.getenv("HOLDEM_SMALL_BLIND", "10"))
DEFAULT_BIG_BLIND = int(os.getenv("HOLDEM_BIG_BLIND", "20"))

# Seconds the shell waits before applying an AI decision (pacing only)
AI_DELAY_SECONDS = float(os.getenv("HOLDEM_AI_DELAY", "0.6"))

# Play-money balance for the in-memory balance service used by the CLI
DEFAULT_START_BALANCE = int(os.getenv("HOLDEM_START_BALANCE", "5000"))

HUMAN_NAME = os.getenv("HOLDEM_HUMAN_NAME", "You")

LOG_LEVEL = os.getenv("HOLDEM_LOG_LEVEL", "WARNING")

# Limits accepted by TableConfig.validate()
MIN_PLAYERS = 2
MAX_PLAYERS = 6
MIN_STARTING_CHIPS = 100
