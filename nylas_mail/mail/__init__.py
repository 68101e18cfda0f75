from .attachments import Attachment
from .builder import SendMessageBuilder
from .enums import Fields
from .factory import MailboxFactory
from .mailbox import Mailbox, OfflineMailbox, OnlineMailbox
from .models import Confirmation, Message, Participant, ScheduledMessage

__all__ = [
    "Attachment",
    "Confirmation",
    "Fields",
    "Mailbox",
    "MailboxFactory",
    "Message",
    "OfflineMailbox",
    "OnlineMailbox",
    "Participant",
    "ScheduledMessage",
    "SendMessageBuilder",
]
