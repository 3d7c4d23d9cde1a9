# consentrelay/__init__.py
"""
consent-relay - 基于同意状态的 MTB 文件中继

从 Kafka 消费 MTB 文件，按同意状态向注册表提交或删除，并把关联响应发布回 Kafka。
"""

from __future__ import annotations

__version__ = "0.1.0"


# 延迟导入以避免循环依赖
def __getattr__(name: str):
    """延迟导入模块"""
    if name == "DispatchPipeline":
        from consentrelay.core.pipeline import DispatchPipeline
        return DispatchPipeline
    if name == "parse":
        from consentrelay.application.parsing import parse
        return parse
    if name == "can_dispatch":
        from consentrelay.application.parsing import can_dispatch
        return can_dispatch
    if name == "extract_consent":
        from consentrelay.application.parsing import extract_consent
        return extract_consent
    if name == "route":
        from consentrelay.application.dispatch import route
        return route
    if name == "compose":
        from consentrelay.application.dispatch import compose
        return compose
    if name == "RegistryClient":
        from consentrelay.infrastructure.api_clients import RegistryClient
        return RegistryClient
    if name == "load_settings":
        from consentrelay.config import load_settings
        return load_settings

    raise AttributeError(f"module 'consentrelay' has no attribute '{name}'")


__all__ = [
    "__version__",
    "DispatchPipeline",
    "parse",
    "can_dispatch",
    "extract_consent",
    "route",
    "compose",
    "RegistryClient",
    "load_settings",
]
