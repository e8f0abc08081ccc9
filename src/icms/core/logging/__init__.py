from .builder import get_queue_stats, make_dict_config, setup_logging, stop_queue_logging
from .filters import RequestIdFilter, get_request_id, set_request_id
from .middleware import RequestIDMiddleware

__all__ = [
    "setup_logging",
    "stop_queue_logging",
    "make_dict_config",
    "get_queue_stats",
    "set_request_id",
    "get_request_id",
    "RequestIdFilter",
    "RequestIDMiddleware",
]
