import os
import dotenv


dotenv.load_dotenv()


# Defaults
VERBOSE = False
LOG_PATH = ""
LOG_LEVEL = "INFO"
LOG_ROTATION = "1 week"
LOG_RETENTION = "1 month"

# Transmission defaults
TRANSMISSION_URL = "http://localhost:9091"
TRANSMISSION_USERNAME = ""
TRANSMISSION_PASSWORD = ""
TRANSMISSION_TIMEOUT = 30
TRANSMISSION_DOWNLOAD_DIR = ""

# MCP defaults
MCP_TRANSPORT = "stdio"
CHARACTER_LIMIT = 25000  # Keeps tool output from flooding the model context


class Config:
    VERBOSE = os.getenv("VERBOSE", str(VERBOSE)).lower() == "true"

    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL)
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    # Transmission Configuration
    TRANSMISSION_URL = os.getenv("TRANSMISSION_URL", TRANSMISSION_URL)
    TRANSMISSION_USERNAME = os.getenv("TRANSMISSION_USERNAME", TRANSMISSION_USERNAME)
    TRANSMISSION_PASSWORD = os.getenv("TRANSMISSION_PASSWORD", TRANSMISSION_PASSWORD)
    TRANSMISSION_TIMEOUT = float(os.getenv("TRANSMISSION_TIMEOUT", TRANSMISSION_TIMEOUT))
    TRANSMISSION_DOWNLOAD_DIR = os.getenv("TRANSMISSION_DOWNLOAD_DIR", TRANSMISSION_DOWNLOAD_DIR)

    # MCP Configuration
    MCP_TRANSPORT = os.getenv("MCP_TRANSPORT", MCP_TRANSPORT)
    CHARACTER_LIMIT = int(os.getenv("CHARACTER_LIMIT", CHARACTER_LIMIT))
