from __future__ import annotations

from nylas_mail.auth.enums import GrantType
from nylas_mail.auth.grant import Grant
from nylas_mail.errors import InvalidGrantTypeError
from nylas_mail.mail.mailbox import Mailbox, OfflineMailbox, OnlineMailbox
from nylas_mail.transport.base import HttpTransport


class MailboxFactory:
    @staticmethod
    def create(grant: Grant, *, base_url: str, transport: HttpTransport) -> Mailbox:
        if grant.grant_type is GrantType.ONLINE:
            return OnlineMailbox(grant, base_url=base_url, transport=transport)
        if grant.grant_type is GrantType.OFFLINE:
            return OfflineMailbox(grant, base_url=base_url, transport=transport)
        raise InvalidGrantTypeError(f"Unsupported grant type: {grant.grant_type!r}")
