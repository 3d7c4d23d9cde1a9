from .settings import Settings, KafkaConfig, SettingsModel, load_settings

__all__ = ["Settings", "KafkaConfig", "SettingsModel", "load_settings"]
