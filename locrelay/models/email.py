"""
Email message model handed to the notification sender.
"""

from pydantic import BaseModel, Field
from typing import Optional


class EmailMessage(BaseModel):
    """One plain-text email. Built per location report, then discarded."""
    to: str = Field(..., description="Recipient address")
    from_email: str = Field(..., description="Sender address")
    from_name: Optional[str] = Field(None, description="Sender display name")
    reply_to: Optional[str] = Field(None, description="Reply-to address")
    subject: str
    body: str
