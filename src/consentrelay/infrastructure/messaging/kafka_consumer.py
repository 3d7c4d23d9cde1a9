from __future__ import annotations

import logging
from typing import Any, AsyncIterable, Dict, Optional, Set

from aiokafka import ConsumerRebalanceListener
from aiokafka.structs import TopicPartition

from consentrelay.core.pipeline import DispatchPipeline, Dispatched, ParseFailed, PipelineResult

logger = logging.getLogger(__name__)


class LoggingRebalanceListener(ConsumerRebalanceListener):
    """Log partition movements during group rebalances."""

    async def on_partitions_revoked(self, revoked: Set[TopicPartition]) -> None:
        logger.debug(f"Pre rebalance, revoked: {sorted(str(tp) for tp in revoked)}")

    async def on_partitions_assigned(self, assigned: Set[TopicPartition]) -> None:
        logger.debug(f"Post rebalance, assigned: {sorted(str(tp) for tp in assigned)}")


def _decode(raw: Optional[bytes]) -> Optional[str]:
    if raw is None:
        return None
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


class RelayConsumer:
    """
    Feeds consumed records through the dispatch pipeline, one at a time.

    ``consumer`` is anything async-iterable yielding records with ``key``,
    ``value``, ``topic``, ``partition`` and ``offset`` (an ``AIOKafkaConsumer``
    in production).
    """

    def __init__(self, consumer: AsyncIterable[Any], pipeline: DispatchPipeline):
        self.consumer = consumer
        self.pipeline = pipeline
        self.stats: Dict[str, int] = {"dispatched": 0, "parse_failed": 0, "skipped": 0, "errors": 0}

    async def run(self) -> None:
        async for record in self.consumer:
            await self.process(record)

    async def process(self, record: Any) -> Optional[PipelineResult]:
        where = f"{record.topic}[{record.partition}]@{record.offset}"

        payload = _decode(record.value)
        if payload is None:
            logger.warning(f"Unable to use payload! ({where})")
            self.stats["skipped"] += 1
            return None

        key = _decode(record.key)
        if key is None:
            logger.warning(f"Unable to use key! ({where})")
            self.stats["skipped"] += 1
            return None

        try:
            result = await self.pipeline.handle(payload, key)
        except Exception as e:  # noqa: BLE001
            # The pipeline maps every expected failure; anything else must not stop the loop.
            logger.exception(f"Unexpected error while handling {where}: {e}")
            self.stats["errors"] += 1
            return None

        if isinstance(result, ParseFailed):
            logger.warning(f"Cannot parse MTB file for consent ({where}): {result.reason}")
            self.stats["parse_failed"] += 1
        elif isinstance(result, Dispatched):
            logger.info(
                f"Request {result.envelope.request_id} relayed ({where}), "
                f"status {result.envelope.status_code}"
            )
            self.stats["dispatched"] += 1
        return result
