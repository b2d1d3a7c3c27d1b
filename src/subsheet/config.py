"""Configuration and environment settings."""

import os
from dotenv import load_dotenv

# Force reload of environment variables
load_dotenv(override=True)

# Directory Settings
DATA_DIR = os.getenv("DATA_DIR", "data")
CREDENTIALS_DIR = os.getenv("CREDENTIALS_DIR", os.path.join(DATA_DIR, "credentials"))

# Google API Settings
SCOPES = [
    "https://www.googleapis.com/auth/youtube.force-ssl",
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/userinfo.email",
]
CLIENT_SECRETS_FILE = os.getenv("GOOGLE_CLIENT_SECRETS_FILE")
TOKEN_FILE = os.path.join(CREDENTIALS_DIR, "token.pickle")

# Transfer Settings
PAGE_SIZE = 50  # Maximum allowed by subscriptions.list
MAX_PAGES = 20  # Caps a fetch at 1000 subscriptions
WRITE_BATCH_SIZE = 100  # Rows per values.update call

# Sheet Layout
SHEET_TITLE_PREFIX = os.getenv("SHEET_TITLE_PREFIX", "YouTube Subscriptions")
HEADER_ROW = ["Channel ID", "Channel Name", "Channel URL"]
HEADER_BACKGROUND = {"red": 0.26, "green": 0.52, "blue": 0.96}
HEADER_FOREGROUND = {"red": 1.0, "green": 1.0, "blue": 1.0}

# URL Templates
CHANNEL_URL_TEMPLATE = "https://www.youtube.com/channel/{channel_id}"
SPREADSHEET_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/edit"
SHARE_ID_PLACEHOLDER = "YOUR_SHEET_ID"
