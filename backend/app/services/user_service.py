"""Current-user resolution — bearer credential to user document."""

from __future__ import annotations

import logging

from jose import JWTError, jwt

from app.config import Settings
from app.exceptions import UpstreamFailure
from app.schemas.auth import CurrentUser
from app.storage import DocumentStore
from app.storage.appwrite import AppwriteAccount
from app.storage.query import Query

logger = logging.getLogger(__name__)


class UserResolver:
    """Resolve the authenticated user, or None.

    With the local backend the credential is a JWT whose ``sub`` is the
    account id. With the remote backend it is a session secret, exchanged
    for the account via the account API.
    """

    def __init__(
        self,
        documents: DocumentStore,
        settings: Settings,
        account: AppwriteAccount | None = None,
    ):
        self._documents = documents
        self._settings = settings
        self._account = account

    async def _account_id(self, credential: str) -> str | None:
        if self._account is not None:
            try:
                account = await self._account.get(credential)
            except UpstreamFailure as e:
                logger.debug("Session rejected by account API: %s", e)
                return None
            return account.get("id")

        try:
            payload = jwt.decode(
                credential,
                self._settings.secret_key,
                algorithms=[self._settings.token_algorithm],
            )
        except JWTError:
            return None
        return payload.get("sub")

    async def resolve(self, credential: str | None) -> CurrentUser | None:
        if not credential:
            return None

        account_id = await self._account_id(credential)
        if not account_id:
            return None

        result = await self._documents.list_documents(
            self._settings.database_id,
            self._settings.users_collection_id,
            [Query.equal("accountId", [account_id]), Query.limit(1)],
        )
        if not result.documents:
            logger.info("No user document for account %s", account_id)
            return None
        return CurrentUser.model_validate(result.documents[0])
