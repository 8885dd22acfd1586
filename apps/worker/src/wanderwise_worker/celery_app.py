"""Celery application configuration."""

from __future__ import annotations

import logging

from celery import Celery
from celery.signals import after_setup_logger

from wanderwise_core.log_config import LOG_FORMAT, RequestIdFilter

from .config import settings

app = Celery(
    "wanderwise_worker",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["wanderwise_worker.tasks"],
)

app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_routes={
        "wanderwise_worker.tasks.find_flights": {"queue": settings.flight_queue},
    },
    # At-least-once: ack after the task body ran, redeliver if the worker dies.
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    task_ignore_result=True,
)


@after_setup_logger.connect
def _add_request_id_format(logger: logging.Logger, *args: object, **kwargs: object) -> None:
    for handler in logger.handlers:
        handler.addFilter(RequestIdFilter())
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
