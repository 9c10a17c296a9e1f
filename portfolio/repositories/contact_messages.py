from portfolio.models.contact_message import ContactMessage
from portfolio.repositories.base import BaseRepository
from portfolio.utils.query_builder import Equals, ResourceQuery, Search, Since, Until

CONTACT_MESSAGE_QUERY = ResourceQuery(
    model=ContactMessage,
    filters={
        "search": Search(ContactMessage.name, ContactMessage.email, ContactMessage.message),
        "read": Equals(ContactMessage.read),
        "start_date": Since(ContactMessage.created_at),
        "end_date": Until(ContactMessage.created_at),
    },
    sortable={
        "created_at": ContactMessage.created_at,
        "name": ContactMessage.name,
        "read": ContactMessage.read,
    },
)


class ContactMessageRepository(BaseRepository[ContactMessage]):
    model = ContactMessage
    query = CONTACT_MESSAGE_QUERY
    resource_name = "Contact message"
