"""Models for the MessageCard notification document posted to the webhook."""

from collections.abc import Sequence
from typing import Literal

from pydantic import Field

from run_report_notifier.models.base import Model


class NotificationFact(Model):
    """A name/value row displayed in a notification section."""

    name: str
    value: str


class NotificationSection(Model):
    """A section of the notification card."""

    title: str = Field(..., alias="activityTitle")
    subtitle: str = Field(..., alias="activitySubtitle")
    image: str = Field(..., alias="activityImage")
    facts: Sequence[NotificationFact] = Field(default_factory=list)
    markdown: bool = True


class NotificationPayload(Model):
    """Complete notification document."""

    type: Literal["MessageCard"] = Field(default="MessageCard", alias="@type")
    context: str = Field(default="http://schema.org/extensions", alias="@context")
    theme_color: str = Field(default="0076D7", alias="themeColor")
    summary: str
    sections: Sequence[NotificationSection] = Field(default_factory=list)
