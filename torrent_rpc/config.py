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
TRANSMISSION_URL = "http://localhost:9091/transmission/rpc"
TRANSMISSION_TIMEOUT = 30.0            # Overall deadline per exchange, in seconds
SESSION_RETRY_LIMIT = 3                # Re-sends allowed after a 409 session challenge


class Config:
    VERBOSE = os.getenv("VERBOSE", str(VERBOSE)).lower() == "true"

    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL)
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    # Transmission Configuration
    TRANSMISSION_URL = os.getenv("TRANSMISSION_URL", TRANSMISSION_URL)
    TRANSMISSION_TIMEOUT = float(os.getenv("TRANSMISSION_TIMEOUT", TRANSMISSION_TIMEOUT))
    SESSION_RETRY_LIMIT = int(os.getenv("SESSION_RETRY_LIMIT", SESSION_RETRY_LIMIT))


class TestConfig:
    TRANSMISSION_URL = "http://transmission.test:9091/transmission/rpc"
    TRANSMISSION_TIMEOUT = 5.0
    SESSION_RETRY_LIMIT = 2
