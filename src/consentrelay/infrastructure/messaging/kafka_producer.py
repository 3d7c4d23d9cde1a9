from __future__ import annotations

import asyncio
import logging

from aiokafka import AIOKafkaProducer
from aiokafka.errors import KafkaError

from consentrelay.application.ports.response_sink_port import ResponseSink
from consentrelay.domain import ResponseEnvelope

logger = logging.getLogger(__name__)


class KafkaResponseSink(ResponseSink):
    """
    Publishes composed responses to the response topic.

    Fire-and-forget: one attempt bounded by ``timeout``; failures are logged
    and reported as ``False``.
    """

    def __init__(self, producer: AIOKafkaProducer, topic: str, timeout: float = 1.0):
        self.producer = producer
        self.topic = topic
        self.timeout = timeout

    async def publish(self, key: str, envelope: ResponseEnvelope) -> bool:
        try:
            await asyncio.wait_for(
                self.producer.send_and_wait(
                    self.topic,
                    value=envelope.to_json().encode("utf-8"),
                    key=key.encode("utf-8"),
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Response not sent: timeout after {self.timeout}s (request {envelope.request_id})")
            return False
        except KafkaError as e:
            logger.warning(f"Response not sent: {e} (request {envelope.request_id})")
            return False
        return True
