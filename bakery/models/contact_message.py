"""Contact message left on the public site."""
from datetime import datetime
from pydantic import BaseModel


class ContactMessage(BaseModel):
    id: int
    name: str = ''
    email: str = ''
    message: str = ''
    created_at: datetime
