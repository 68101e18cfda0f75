from .auth import Grant, GrantType, Provider
from .client import NylasClient
from .config import NylasConfig
from .errors import (
    ApiError,
    InvalidGrantTypeError,
    MalformedResponseError,
    NylasError,
    TransportError,
    UnsuccessfulTokenExchangeError,
)
from .mail import (
    Attachment,
    Confirmation,
    Fields,
    Mailbox,
    MailboxFactory,
    Message,
    OfflineMailbox,
    OnlineMailbox,
    Participant,
    ScheduledMessage,
)
from .transport import HttpResponse, HttpTransport, RequestsTransport

__all__ = [
    "ApiError",
    "Attachment",
    "Confirmation",
    "Fields",
    "Grant",
    "GrantType",
    "HttpResponse",
    "HttpTransport",
    "InvalidGrantTypeError",
    "Mailbox",
    "MailboxFactory",
    "MalformedResponseError",
    "Message",
    "NylasClient",
    "NylasConfig",
    "NylasError",
    "OfflineMailbox",
    "OnlineMailbox",
    "Participant",
    "Provider",
    "RequestsTransport",
    "ScheduledMessage",
    "TransportError",
    "UnsuccessfulTokenExchangeError",
]
