"""
基于 pydantic 的配置校验与加载。

优先级：环境变量 > YAML 文件 > 默认值。结果为 dataclass Settings，启动时构造一次并显式传递。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from consentrelay.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "etl-processor"


@dataclass
class KafkaConfig:
    """Kafka 配置"""
    bootstrap_servers: str = "kafka:9092"
    topic: str = DEFAULT_TOPIC
    response_topic: str = f"{DEFAULT_TOPIC}_response"
    group_id: str = f"{DEFAULT_TOPIC}_group"
    auto_offset_reset: str = "earliest"
    publish_timeout: float = 1.0


@dataclass
class Settings:
    """主配置类"""
    rest_uri: str = ""
    http_timeout: float = 5.0
    log_level: str = "INFO"
    kafka: KafkaConfig = field(default_factory=KafkaConfig)


class KafkaConfigModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    bootstrap_servers: str = "kafka:9092"
    topic: str = Field(default=DEFAULT_TOPIC, min_length=1)
    response_topic: Optional[str] = None
    group_id: Optional[str] = None
    auto_offset_reset: str = Field(default="earliest", pattern="^(earliest|latest|none)$")
    publish_timeout: float = Field(default=1.0, gt=0)


class SettingsModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rest_uri: str = ""
    http_timeout: float = Field(default=5.0, gt=0)
    log_level: str = "INFO"
    kafka: KafkaConfigModel = Field(default_factory=KafkaConfigModel)

    def to_dataclass(self) -> Settings:
        topic = self.kafka.topic
        return Settings(
            rest_uri=self.rest_uri.rstrip("/"),
            http_timeout=self.http_timeout,
            log_level=self.log_level.upper(),
            kafka=KafkaConfig(
                bootstrap_servers=self.kafka.bootstrap_servers,
                topic=topic,
                response_topic=self.kafka.response_topic or f"{topic}_response",
                group_id=self.kafka.group_id or f"{topic}_group",
                auto_offset_reset=self.kafka.auto_offset_reset,
                publish_timeout=self.kafka.publish_timeout,
            ),
        )


# env var -> (section, key); section None means top level
ENV_VARS: Dict[str, tuple] = {
    "APP_REST_URI": (None, "rest_uri"),
    "APP_HTTP_TIMEOUT": (None, "http_timeout"),
    "APP_LOG_LEVEL": (None, "log_level"),
    "KAFKA_BOOTSTRAP_SERVERS": ("kafka", "bootstrap_servers"),
    "APP_KAFKA_TOPIC": ("kafka", "topic"),
    "APP_KAFKA_RESPONSE_TOPIC": ("kafka", "response_topic"),
    "APP_KAFKA_GROUP_ID": ("kafka", "group_id"),
    "APP_KAFKA_PUBLISH_TIMEOUT": ("kafka", "publish_timeout"),
}


def _read_yaml(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return {}
    cfg_file = Path(config_path).expanduser()
    if not cfg_file.exists():
        raise ConfigError(message=f"Config file not found: {cfg_file}")
    data = yaml.safe_load(cfg_file.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError(message=f"Config file must hold a mapping: {cfg_file}")
    return data


def _apply_env(data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    merged = dict(data)
    merged["kafka"] = dict(merged.get("kafka") or {})
    for var, (section, key) in ENV_VARS.items():
        value = environ.get(var)
        if value is None or value == "":
            continue
        if section is None:
            merged[key] = value
        else:
            merged[section][key] = value
    return merged


def load_settings(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build the process settings.

    Raises:
        ConfigError: invalid values, or no registry address configured
    """
    environ = os.environ if environ is None else environ
    data = _apply_env(_read_yaml(config_path), environ)

    try:
        model = SettingsModel.model_validate(data)
    except ValidationError as e:
        raise ConfigError(message=f"Invalid configuration: {e}") from e

    settings = model.to_dataclass()
    if not settings.rest_uri:
        raise ConfigError(message="Missing configuration 'APP_REST_URI'")

    logger.debug(
        f"Settings loaded: registry={settings.rest_uri} topic={settings.kafka.topic} "
        f"response_topic={settings.kafka.response_topic}"
    )
    return settings
