# services/device_logs/models.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

# wire types: created_at is int64, device_count is uint32
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT32_MAX = 2**32 - 1


class TimestampPolicy(str, Enum):
    """Which side supplies `created_at` for a new record."""

    CLIENT = "client"
    SERVER = "server"


class LogPayload(BaseModel):
    """Fields every caller must send. Anything else in the body is ignored."""

    # strict: "12" is not a device count, true is not an int
    model_config = ConfigDict(strict=True, extra="ignore")

    location: str
    device_count: int


class LogRequest(LogPayload):
    created_at: Optional[int] = None


class LogRecord(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    created_at: int
    location: str
    device_count: int

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: int) -> int:
        if not INT64_MIN <= v <= INT64_MAX:
            raise ValueError("created_at must fit in a signed 64-bit integer")
        return v

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("location must not be empty")
        return v

    @field_validator("device_count")
    @classmethod
    def validate_device_count(cls, v: int) -> int:
        if v < 0:
            raise ValueError("device_count must not be negative")
        if v > UINT32_MAX:
            raise ValueError("device_count must fit in an unsigned 32-bit integer")
        return v

    def for_dynamodb(self) -> dict:
        return {
            "Location": self.location,
            "CreatedAt": self.created_at,
            "DeviceCount": self.device_count,
        }
