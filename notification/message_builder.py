from typing import Optional
from pydantic import BaseModel

MATCH_CREATED = "match_created"
MATCH_ACCEPTED = "match_accepted"
MATCH_REJECTED = "match_rejected"


class MatchNotificationContent(BaseModel):
    match_id: str
    volunteer_name: str
    volunteer_email: Optional[str] = None
    vacancy_title: str
    organisation_name: str
    organisation_email: Optional[str] = None
    conversation_id: Optional[str] = None


class BuiltMessage(BaseModel):
    recipient: Optional[str]
    subject: str
    body: str


class NotificationMessageBuilder:
    """Plain-text bodies for match lifecycle events."""

    def __init__(self, base_url: str = "http://localhost:8080"):
        self.base_url = base_url.rstrip('/')

    def build(self, event: str, content: MatchNotificationContent) -> BuiltMessage:
        if event == MATCH_CREATED:
            return self._match_created(content)
        if event == MATCH_ACCEPTED:
            return self._match_accepted(content)
        if event == MATCH_REJECTED:
            return self._match_rejected(content)
        raise ValueError(f"Unknown match event: {event}")

    def _match_created(self, content: MatchNotificationContent) -> BuiltMessage:
        # Goes to the organisation
        body = f"""Hello {content.organisation_name},

{content.volunteer_name} is interested in your vacancy "{content.vacancy_title}".

Review the match: {self.base_url}/organisation/matches/{content.match_id}

---
VolunteerMatch
"""
        return BuiltMessage(
            recipient=content.organisation_email,
            subject=f"New interest in {content.vacancy_title}",
            body=body,
        )

    def _match_accepted(self, content: MatchNotificationContent) -> BuiltMessage:
        link = f"{self.base_url}/chat"
        if content.conversation_id:
            link = f"{link}?conversation={content.conversation_id}"

        body = f"""Hi {content.volunteer_name},

Good news: {content.organisation_name} accepted your match for "{content.vacancy_title}".
A conversation has been opened so you can get in touch.

Start chatting: {link}

---
VolunteerMatch
"""
        return BuiltMessage(
            recipient=content.volunteer_email,
            subject=f"You matched with {content.organisation_name}",
            body=body,
        )

    def _match_rejected(self, content: MatchNotificationContent) -> BuiltMessage:
        body = f"""Hi {content.volunteer_name},

{content.organisation_name} decided not to continue with your match for "{content.vacancy_title}".
There are plenty of other vacancies waiting for you.

Keep swiping: {self.base_url}/swipe

---
VolunteerMatch
"""
        return BuiltMessage(
            recipient=content.volunteer_email,
            subject=f"Update on {content.vacancy_title}",
            body=body,
        )
