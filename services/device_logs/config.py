# services/device_logs/config.py

import os

from dotenv import load_dotenv

from services.device_logs.models import TimestampPolicy

DEFAULT_REGION = "us-east-1"
DEFAULT_PORT = 8080


def get_region() -> str:
    return os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or DEFAULT_REGION


def get_timestamp_policy(default: TimestampPolicy = TimestampPolicy.CLIENT) -> TimestampPolicy:
    """Read LOG_TIMESTAMP_POLICY ("client" or "server")."""
    raw = os.getenv("LOG_TIMESTAMP_POLICY")
    if not raw:
        return default
    try:
        return TimestampPolicy(raw.strip().lower())
    except ValueError:
        raise RuntimeError(f"Invalid LOG_TIMESTAMP_POLICY: {raw!r}") from None


def get_server_port() -> int:
    return int(os.getenv("PORT", str(DEFAULT_PORT)))


def load_local_env() -> bool:
    # Lambda gets its configuration from the function environment
    if os.getenv("AWS_EXECUTION_ENV"):
        return False
    return load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env.local"))
