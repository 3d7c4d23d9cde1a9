"""
Kafka 适配器：消费入站消息，发布响应。
"""

from .kafka_consumer import RelayConsumer, LoggingRebalanceListener
from .kafka_producer import KafkaResponseSink

__all__ = ["RelayConsumer", "LoggingRebalanceListener", "KafkaResponseSink"]
