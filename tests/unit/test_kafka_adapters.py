"""
Kafka adapter unit tests (producer/consumer are mocked)
"""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiokafka.errors import KafkaTimeoutError

from consentrelay.core.pipeline import Dispatched, DispatchPipeline, ParseFailed
from consentrelay.domain import ResponseEnvelope
from consentrelay.infrastructure.messaging import KafkaResponseSink, LoggingRebalanceListener, RelayConsumer
from tests.fakes import FakeRegistry, FakeSink, make_message


def _record(value, key=b"key-1", offset=0):
    return SimpleNamespace(topic="etl-processor", partition=0, offset=offset, key=key, value=value)


class _Records:
    def __init__(self, records):
        self._records = list(records)

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._records:
            raise StopAsyncIteration
        return self._records.pop(0)


class TestKafkaResponseSink:
    @pytest.mark.asyncio
    async def test_publishes_keyed_json(self):
        producer = MagicMock()
        producer.send_and_wait = AsyncMock()
        sink = KafkaResponseSink(producer, "etl-processor_response")

        ok = await sink.publish("key-1", ResponseEnvelope("r1", 200, {}))

        assert ok is True
        producer.send_and_wait.assert_awaited_once()
        args, kwargs = producer.send_and_wait.call_args
        assert args == ("etl-processor_response",)
        assert kwargs["key"] == b"key-1"
        assert json.loads(kwargs["value"]) == {"request_id": "r1", "status_code": 200, "status_body": {}}

    @pytest.mark.asyncio
    async def test_kafka_error_is_swallowed(self, caplog):
        producer = MagicMock()
        producer.send_and_wait = AsyncMock(side_effect=KafkaTimeoutError())
        sink = KafkaResponseSink(producer, "responses")

        assert await sink.publish("k", ResponseEnvelope("r1", 900, {})) is False
        assert "Response not sent" in caplog.text

    @pytest.mark.asyncio
    async def test_slow_broker_times_out(self):
        async def never(*args, **kwargs):
            await asyncio.sleep(10)

        producer = MagicMock()
        producer.send_and_wait = never
        sink = KafkaResponseSink(producer, "responses", timeout=0.05)

        assert await sink.publish("k", ResponseEnvelope("r1", 200, {})) is False


class TestRelayConsumer:
    @pytest.mark.asyncio
    async def test_runs_every_record_through_pipeline(self):
        registry, sink = FakeRegistry(), FakeSink()
        records = _Records(
            [
                _record(make_message(request_id="a").encode(), key=b"k1", offset=0),
                _record(b'{"requestId":"r3"}', key=b"k2", offset=1),
                _record(make_message(request_id="c", status="rejected").encode(), key=b"k3", offset=2),
            ]
        )
        relay = RelayConsumer(records, DispatchPipeline(registry, sink))

        await relay.run()

        assert [c[0] for c in registry.calls] == ["submit", "delete"]
        assert [k for k, _ in sink.published] == ["k1", "k3"]
        assert relay.stats["dispatched"] == 2
        assert relay.stats["parse_failed"] == 1

    @pytest.mark.asyncio
    async def test_skips_unusable_key_or_payload(self, caplog):
        pipeline = MagicMock()
        pipeline.handle = AsyncMock()
        relay = RelayConsumer(_Records([]), pipeline)

        assert await relay.process(_record(None)) is None
        assert await relay.process(_record(b"\xff\xfe", key=b"k")) is None
        assert await relay.process(_record(make_message().encode(), key=None)) is None
        assert await relay.process(_record(make_message().encode(), key=b"\xc3\x28")) is None

        pipeline.handle.assert_not_awaited()
        assert relay.stats["skipped"] == 4
        assert "Unable to use payload!" in caplog.text
        assert "Unable to use key!" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_errors_do_not_stop_the_loop(self):
        pipeline = MagicMock()
        pipeline.handle = AsyncMock(side_effect=[RuntimeError("boom"), ParseFailed(reason="bad")])
        relay = RelayConsumer(_Records([_record(b"{}"), _record(b"{}", offset=1)]), pipeline)

        await relay.run()

        assert pipeline.handle.await_count == 2
        assert relay.stats["errors"] == 1
        assert relay.stats["parse_failed"] == 1

    @pytest.mark.asyncio
    async def test_passes_decoded_key_and_value(self):
        pipeline = MagicMock()
        envelope = ResponseEnvelope("r1", 200, {})
        pipeline.handle = AsyncMock(return_value=Dispatched(envelope=envelope, correlation_key="ключ"))
        relay = RelayConsumer(_Records([]), pipeline)

        result = await relay.process(_record(b'{"a":1}', key="ключ".encode("utf-8")))

        pipeline.handle.assert_awaited_once_with('{"a":1}', "ключ")
        assert isinstance(result, Dispatched)


@pytest.mark.asyncio
async def test_rebalance_listener_logs(caplog):
    from aiokafka.structs import TopicPartition

    listener = LoggingRebalanceListener()
    with caplog.at_level("DEBUG", logger="consentrelay.infrastructure.messaging.kafka_consumer"):
        await listener.on_partitions_revoked({TopicPartition("etl-processor", 0)})
        await listener.on_partitions_assigned({TopicPartition("etl-processor", 1)})

    assert "Pre rebalance" in caplog.text
    assert "Post rebalance" in caplog.text


def test_build_pipeline_wires_sink_to_response_topic():
    from consentrelay.bootstrap import build_pipeline
    from consentrelay.config import load_settings
    from consentrelay.infrastructure.api_clients import RegistryClient

    settings = load_settings(environ={"APP_REST_URI": "http://registry", "APP_KAFKA_TOPIC": "mtb"})
    registry = RegistryClient(settings.rest_uri, timeout=settings.http_timeout)

    pipeline = build_pipeline(settings, registry, MagicMock())

    assert pipeline.downstream is registry
    assert isinstance(pipeline.sink, KafkaResponseSink)
    assert pipeline.sink.topic == "mtb_response"
    assert pipeline.describe()["sink"] == "KafkaResponseSink"
