"""User model - staff accounts for the admin panel."""
import enum
from typing import List
from pydantic import BaseModel, Field


class Role(str, enum.Enum):
    """Staff role."""
    MANAGER = 'manager'
    STOCKIST = 'stockist'
    CASHIER = 'cashier'


class User(BaseModel):
    """Staff user. Passwords are plain text: this is a local demo."""

    id: int
    name: str
    email: str
    roles: List[Role] = Field(..., min_length=1)
    password: str
    is_active: bool = True

    def public_dict(self) -> dict:
        """Serializable view without the password."""
        return self.model_dump(mode='json', exclude={'password'})

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
