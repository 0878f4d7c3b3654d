"""Auth schemas — the resolved current user."""

from app.schemas.files import CamelModel


class CurrentUser(CamelModel):
    """User document of the authenticated account."""
    id: str
    email: str
    full_name: str = ""
    avatar: str = ""
    account_id: str
