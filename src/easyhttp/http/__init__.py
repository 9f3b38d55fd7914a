"""HTTP request building, execution and logging."""

from .batch import BatchExecutor
from .builder import build_request
from .builder import build_url
from .builder import encode_query
from .executor import RequestExecutor
from .logger import DEFAULT_LOG_FILE
from .logger import FileHTTPLogger
from .logger import HTTPLogger
from .logger import NullHTTPLogger

__all__ = [
    "DEFAULT_LOG_FILE",
    "BatchExecutor",
    "FileHTTPLogger",
    "HTTPLogger",
    "NullHTTPLogger",
    "RequestExecutor",
    "build_request",
    "build_url",
    "encode_query",
]
