from .envelope import parse, can_dispatch
from .consent import extract_consent

__all__ = ["parse", "can_dispatch", "extract_consent"]
