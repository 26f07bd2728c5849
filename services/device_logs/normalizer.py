# services/device_logs/normalizer.py

from typing import Any, Callable, Mapping, Optional, Protocol, Tuple, Type, Union

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from services.common.time_utils import epoch_seconds, epoch_to_iso_z
from services.device_logs.config import get_timestamp_policy
from services.device_logs.crud import DynamoLogStore, StorageError
from services.device_logs.models import LogPayload, LogRecord, LogRequest, TimestampPolicy

logger = Logger(service="device-logs", child=True)

ONLINE_MESSAGE = "Function is online"
SUCCESS_MESSAGE = "Success!"
BAD_INPUT_MESSAGE = "bad input"
STORE_FAILED_MESSAGE = "unable to store log"
METHOD_NOT_ALLOWED_MESSAGE = "method not allowed"


class InvalidLogRequest(ValueError):
    """Request body could not be turned into a LogRecord."""


class LogStore(Protocol):
    def put(self, record: LogRecord) -> Any: ...


class LogIngestor:
    """
    Turns an inbound request into a LogRecord and writes it once.

    The store is injected and shared across requests; the ingestor itself
    holds no per-request state. `handle` is the HTTP-facing contract and
    returns a (body, status_code) pair.
    """

    def __init__(
        self,
        store: LogStore,
        *,
        policy: TimestampPolicy = TimestampPolicy.CLIENT,
        clock: Callable[[], int] = epoch_seconds,
    ):
        self.store = store
        self.policy = policy
        self.clock = clock

    @classmethod
    def from_env(cls, policy: Optional[TimestampPolicy] = None, dynamodb=None) -> "LogIngestor":
        return cls(DynamoLogStore(dynamodb=dynamodb), policy=policy or get_timestamp_policy())

    @property
    def request_model(self) -> Type[LogPayload]:
        # server-stamped records never look at a caller's created_at
        return LogPayload if self.policy is TimestampPolicy.SERVER else LogRequest

    def normalize(self, body: Union[str, bytes, None]) -> LogRecord:
        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidLogRequest(f"body: {e.reason}") from e
        try:
            request = self.request_model.model_validate_json(body or "")
        except ValidationError as e:
            raise InvalidLogRequest(_describe(e)) from e
        return self.build_record(request)

    def build_record(self, request: LogPayload) -> LogRecord:
        if self.policy is TimestampPolicy.SERVER:
            created_at = self.clock()
        else:
            created_at = getattr(request, "created_at", None)
            if created_at is None:
                raise InvalidLogRequest("created_at: Field required")

        try:
            return LogRecord(
                created_at=created_at,
                location=request.location,
                device_count=request.device_count,
            )
        except ValidationError as e:
            raise InvalidLogRequest(_describe(e)) from e

    def write(self, record: LogRecord) -> LogRecord:
        self.store.put(record)
        logger.info(
            "log_recorded",
            extra={
                "location": record.location,
                "device_count": record.device_count,
                "created_at": record.created_at,
                "created_at_iso": epoch_to_iso_z(record.created_at),
            },
        )
        return record

    def ingest(self, payload: Mapping[str, Any]) -> LogRecord:
        """Validate an already-decoded request object and write it."""
        try:
            request = self.request_model.model_validate(payload)
        except ValidationError as e:
            raise InvalidLogRequest(_describe(e)) from e
        return self.write(self.build_record(request))

    def handle(self, method: str, body: Union[str, bytes, None] = None) -> Tuple[str, int]:
        method = (method or "").upper()

        if method == "GET":
            return ONLINE_MESSAGE, 200

        if method != "POST":
            logger.warning("method_not_allowed", extra={"method": method})
            return METHOD_NOT_ALLOWED_MESSAGE, 405

        try:
            record = self.normalize(body)
        except InvalidLogRequest as e:
            logger.warning("bad_input", extra={"reason": str(e)})
            return BAD_INPUT_MESSAGE, 400

        try:
            self.write(record)
        except StorageError as e:
            # no retry; the caller decides whether to resend
            logger.error("store_failed", extra={"error": str(e), "location": record.location})
            return STORE_FAILED_MESSAGE, 400

        return SUCCESS_MESSAGE, 200


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)
