from .base import HttpResponse, HttpTransport
from .requests_transport import RequestsTransport

__all__ = ["HttpResponse", "HttpTransport", "RequestsTransport"]
