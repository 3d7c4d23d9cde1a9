from .schema import RelayEvent, make_event, new_run_id, utcnow

__all__ = ["RelayEvent", "make_event", "new_run_id", "utcnow"]
