"""
Session Manager - Owns the current user and the stored credential together.

States: RESTORING -> AUTHENTICATED(user) | ANONYMOUS. Restore, sign-in and
sign-out are serialized, so a sign-in issued while a restore is pending
commits only after the restore has finished with the store.
"""

import asyncio
import logging
from typing import Callable, List, Mapping, Optional

from anvaya_client.domain.result import ApiResult
from anvaya_client.domain.session import SessionSnapshot, SessionState
from anvaya_client.domain.user import User
from anvaya_client.ports.credential_port import CredentialStorePort
from anvaya_client.sdk.api import HealthcareApi

logger = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], None]


def user_from_verification(result: ApiResult) -> Optional[User]:
    """
    Extract the verified profile from a /verify-token result.

    Returns:
        User if the call succeeded, reported valid, and carried a usable
        profile; None otherwise
    """
    if not result.success or not isinstance(result.data, Mapping):
        return None
    if not result.data.get("valid"):
        return None

    profile = result.data.get("user")
    if not isinstance(profile, Mapping):
        return None

    try:
        return User.from_dict(dict(profile))
    except (KeyError, TypeError, ValueError):
        return None


class SessionManager:
    """
    Single owner of session state.

    Only this class writes the credential store. The UI reads
    current_user / is_restoring and calls sign_in / sign_out.

    Example:
        sessions = SessionManager(store, api)
        await sessions.restore()
        if sessions.current_user is None:
            show_login()
    """

    def __init__(self, credentials: CredentialStorePort, api: HealthcareApi):
        """
        Args:
            credentials: Credential store (written only by this manager)
            api: API used to validate a stored credential
        """
        self._credentials = credentials
        self._api = api
        self._snapshot = SessionSnapshot.restoring()
        self._lock = asyncio.Lock()
        self._restore_task: Optional["asyncio.Task[SessionSnapshot]"] = None
        self._listeners: List[Listener] = []

    # Published state

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def state(self) -> SessionState:
        return self._snapshot.state

    @property
    def current_user(self) -> Optional[User]:
        return self._snapshot.user

    @property
    def is_restoring(self) -> bool:
        return self._snapshot.is_restoring

    @property
    def is_authenticated(self) -> bool:
        return self._snapshot.is_authenticated

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback for every state change.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed")

    # Transitions

    async def restore(self) -> SessionSnapshot:
        """
        Restore the session from the stored credential.

        Concurrent callers share one in-flight restore.

        Returns:
            Snapshot after the restore (AUTHENTICATED or ANONYMOUS)
        """
        if self._restore_task is None or self._restore_task.done():
            self._restore_task = asyncio.ensure_future(self._restore())
        # a cancelled caller must not abort the shared restore
        return await asyncio.shield(self._restore_task)

    async def _restore(self) -> SessionSnapshot:
        async with self._lock:
            self._publish(SessionSnapshot.restoring())

            token = self._credentials.get()
            if not token:
                logger.info("No stored credential; session is anonymous")
                self._publish(SessionSnapshot.anonymous())
                return self._snapshot

            result = await self._api.verify_token()
            user = user_from_verification(result)

            if user is None:
                logger.info(
                    "Stored credential failed verification (%s); signing out",
                    result.message or "invalid token",
                )
                self._credentials.clear()
                self._publish(SessionSnapshot.anonymous())
                return self._snapshot

            logger.info("Session restored for user %s", user.user_id)
            self._publish(SessionSnapshot.authenticated(user))
            return self._snapshot

    async def _after_restore(self) -> None:
        """Wait for a pending restore so its store writes land first."""
        task = self._restore_task
        if task is not None and not task.done():
            await asyncio.shield(task)

    async def sign_in(self, user: User, credential: str) -> SessionSnapshot:
        """
        Second half of login: persist the credential and become AUTHENTICATED.

        Does not call the network; the credential comes from a prior
        HealthcareApi.login().

        Args:
            user: Verified profile returned by login
            credential: Token returned by login

        Returns:
            AUTHENTICATED snapshot

        Raises:
            ValueError: If credential is empty
        """
        if not credential:
            raise ValueError("sign_in requires a credential")

        await self._after_restore()
        async with self._lock:
            self._credentials.set(credential)
            logger.info("Signed in user %s", user.user_id)
            self._publish(SessionSnapshot.authenticated(user))
            return self._snapshot

    async def sign_out(self) -> SessionSnapshot:
        """
        Clear the credential and become ANONYMOUS.

        Server-side invalidation is best effort; its failure never blocks
        the local sign-out.

        Returns:
            ANONYMOUS snapshot
        """
        await self._after_restore()
        async with self._lock:
            if self._credentials.get():
                try:
                    result = await self._api.invalidate_session()
                    if not result.success:
                        logger.warning("Server-side sign-out failed: %s", result.message)
                except Exception:
                    logger.exception("Server-side sign-out failed")

            self._credentials.clear()
            logger.info("Signed out")
            self._publish(SessionSnapshot.anonymous())
            return self._snapshot

