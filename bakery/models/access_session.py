"""Access session - the single 'who is logged in' record."""
from pydantic import BaseModel, Field


class AccessSession(BaseModel):
    """Current login. ``at`` is the issue time in epoch milliseconds."""

    token: str
    user_id: int = Field(..., alias='userId')
    at: int

    model_config = {'populate_by_name': True}
