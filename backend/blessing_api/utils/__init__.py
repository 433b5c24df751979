from blessing_api.utils.sse import SSEFrame, format_data, format_error
from blessing_api.utils.time import utcnow

__all__ = ["SSEFrame", "format_data", "format_error", "utcnow"]
