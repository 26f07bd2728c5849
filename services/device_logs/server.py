# services/device_logs/server.py

from aws_lambda_powertools import Logger
from flask import Flask, request

from services.device_logs.config import get_server_port, load_local_env
from services.device_logs.normalizer import LogIngestor

logger = Logger(service="device-logs")

# listing OPTIONS and HEAD keeps Flask from answering them itself
ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_app(ingestor: LogIngestor) -> Flask:
    """HTTP front for the same ingestor the Lambda variants use."""
    app = Flask(__name__)

    @app.route("/", methods=ROUTED_METHODS)
    @app.route("/log", methods=ROUTED_METHODS)
    def log_endpoint():
        body, status = ingestor.handle(request.method, request.get_data())
        return body, status, {"Content-Type": "text/plain; charset=utf-8"}

    return app


def main():
    load_local_env()
    app = create_app(LogIngestor.from_env())
    port = get_server_port()
    logger.info("server_starting", extra={"port": port})
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
