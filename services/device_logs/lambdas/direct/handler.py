from functools import lru_cache

from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.metrics import MetricUnit

from services.device_logs.crud import StorageError
from services.device_logs.models import TimestampPolicy
from services.device_logs.normalizer import InvalidLogRequest, LogIngestor

logger = Logger(service="device-logs")
metrics = Metrics(namespace="DeviceLogs", service="device-logs")


@lru_cache(maxsize=1)
def _ingestor() -> LogIngestor:
    # direct callers never send created_at
    return LogIngestor.from_env(policy=TimestampPolicy.SERVER)


@logger.inject_lambda_context
@metrics.log_metrics(capture_cold_start_metric=True)
def handler(event, context):
    """
    Invoked with the request object itself, e.g.
    {"location": "Warehouse-A", "device_count": 12}.

    Raises InvalidLogRequest or StorageError so the runtime reports a
    function error; there is no status code to map.
    """
    try:
        _ingestor().ingest(event)
    except InvalidLogRequest as e:
        metrics.add_metric(name="BadRequest", unit=MetricUnit.Count, value=1)
        logger.warning("bad_input", extra={"reason": str(e)})
        raise
    except StorageError as e:
        metrics.add_metric(name="StoreFailed", unit=MetricUnit.Count, value=1)
        logger.error("store_failed", extra={"error": str(e)})
        raise

    metrics.add_metric(name="LogRecorded", unit=MetricUnit.Count, value=1)
    return {"success": True}
