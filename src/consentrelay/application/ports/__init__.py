"""
应用层端口：下游注册表、响应通道与事件日志。
"""

from .downstream_port import DownstreamClient, HttpResponse
from .response_sink_port import ResponseSink
from .event_log_port import EventLogPort

__all__ = ["DownstreamClient", "HttpResponse", "ResponseSink", "EventLogPort"]
