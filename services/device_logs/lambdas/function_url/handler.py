import base64
import binascii
from functools import lru_cache

from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import LambdaFunctionUrlEvent

from services.device_logs.normalizer import STORE_FAILED_MESSAGE, LogIngestor

logger = Logger(service="device-logs")
metrics = Metrics(namespace="DeviceLogs", service="device-logs")


@lru_cache(maxsize=1)
def _ingestor() -> LogIngestor:
    """Built on first invocation and reused for the life of the container."""
    return LogIngestor.from_env()


def _raw_body(url_event: LambdaFunctionUrlEvent):
    """Body as str, or bytes when base64-encoded. None when absent or undecodable."""
    body = url_event.get("body")
    if not body:
        return None
    if not url_event.is_base64_encoded:
        return body
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("undecodable_body")
        return None


def _status_metric(method: str, body: str, status: int):
    if status == 200:
        return "LogRecorded" if method.upper() == "POST" else None
    if status == 400:
        return "StoreFailed" if body == STORE_FAILED_MESSAGE else "BadRequest"
    if status == 405:
        return "MethodNotAllowed"
    return None


@logger.inject_lambda_context
@metrics.log_metrics(capture_cold_start_metric=True)
def handler(event, context):
    url_event = LambdaFunctionUrlEvent(event)
    method = url_event.request_context.http.method

    body, status = _ingestor().handle(method, _raw_body(url_event))

    metric = _status_metric(method, body, status)
    if metric:
        metrics.add_metric(name=metric, unit=MetricUnit.Count, value=1)

    return {
        "statusCode": status,
        "headers": {"Content-Type": "text/plain"},
        "body": body,
    }
