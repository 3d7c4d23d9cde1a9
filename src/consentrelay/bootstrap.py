"""
Startup wiring: builds every collaborator once and runs the relay loop.
"""

from __future__ import annotations

import logging

from aiokafka import AIOKafkaConsumer, AIOKafkaProducer

from consentrelay.config import Settings
from consentrelay.core.pipeline import DispatchPipeline
from consentrelay.infrastructure.api_clients import RegistryClient
from consentrelay.infrastructure.event_log import LoggingEventLog
from consentrelay.infrastructure.messaging import KafkaResponseSink, LoggingRebalanceListener, RelayConsumer

logger = logging.getLogger(__name__)


def build_pipeline(settings: Settings, registry: RegistryClient, producer: AIOKafkaProducer) -> DispatchPipeline:
    sink = KafkaResponseSink(producer, settings.kafka.response_topic, timeout=settings.kafka.publish_timeout)
    return DispatchPipeline(downstream=registry, sink=sink, event_log=LoggingEventLog())


async def run_relay(settings: Settings) -> None:
    """Consume until cancelled; closes consumer, producer and HTTP session on exit."""
    kafka = settings.kafka
    consumer = AIOKafkaConsumer(
        bootstrap_servers=kafka.bootstrap_servers,
        group_id=kafka.group_id,
        auto_offset_reset=kafka.auto_offset_reset,
    )
    consumer.subscribe([kafka.topic], listener=LoggingRebalanceListener())
    producer = AIOKafkaProducer(
        bootstrap_servers=kafka.bootstrap_servers,
        request_timeout_ms=5000,
    )

    await producer.start()
    try:
        await consumer.start()
        try:
            registry = RegistryClient(settings.rest_uri, timeout=settings.http_timeout)
            pipeline = build_pipeline(settings, registry, producer)
            logger.info(f"Application started: {kafka.topic} -> {kafka.response_topic} ({pipeline.describe()})")
            try:
                await RelayConsumer(consumer, pipeline).run()
            finally:
                await registry.close()
        finally:
            await consumer.stop()
    finally:
        await producer.stop()
