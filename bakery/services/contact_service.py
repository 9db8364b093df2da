"""Contact messages from the public site (append-only)."""
import logging
from datetime import datetime
from typing import List, Optional

from bakery.models import ContactMessage
from bakery.services.product_service import next_id

logger = logging.getLogger(__name__)

CONTACTS_KEY = 'contacts'


def list_contacts(store) -> List[ContactMessage]:
    return store.get(CONTACTS_KEY, [], model=List[ContactMessage])


def send_contact(store, name: str, email: str, message: str, now: Optional[datetime] = None) -> ContactMessage:
    """Append a contact message. Always succeeds."""
    with store.transaction():
        contacts = list_contacts(store)
        contact = ContactMessage(
            id=next_id(contacts),
            name=name or '',
            email=email or '',
            message=message or '',
            created_at=now or datetime.now()
        )
        store.set(CONTACTS_KEY, contacts + [contact])

    logger.info(f"Contact message #{contact.id} stored")
    return contact
