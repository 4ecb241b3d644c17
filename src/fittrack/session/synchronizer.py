"""
fittrack.session.synchronizer

Session synchronizer: the client's single source of truth for "who is signed in".

Responsibilities:
- Subscribe to the credential gateway's change notifications and resolve each one into a
  consistent (session, composite user, administrator flag) triple.
- Expose that triple plus a `loading` flag as read-only state, and notify listeners on change.
- Provide `logout()` and `clear_all_sessions()`, which always leave local state empty.

Resolution never fails from the caller's point of view: gateway and profile-store errors are
logged and degrade to "unauthenticated" or "authenticated without role".
"""

from __future__ import annotations

from collections.abc import Callable

from fittrack.observability.logging import get_logger
from fittrack.session.contracts import (
    CredentialGateway,
    KeyValueStorage,
    ProfileStore,
    Subscription,
)
from fittrack.session.errors import GatewayError, ProfileLookupError
from fittrack.session.models import (
    AuthState,
    CompositeUser,
    Plan,
    Session,
    SessionEvent,
    is_admin_profile,
)
from fittrack.session.storage import purge_namespace

log = get_logger(__name__)

StateListener = Callable[[AuthState], None]


class SessionSynchronizer:
    """
    Explicit auth context: construct once at application start, `start()` to subscribe and run
    the initial resolution, `close()` on teardown.

    Overlapping resolutions are sequenced by a generation counter: only the most recently
    started resolution may write state, so a slow profile lookup for an older notification can
    never overwrite a newer result.
    """

    def __init__(
        self,
        *,
        gateway: CredentialGateway,
        profiles: ProfileStore,
        durable_storage: KeyValueStorage,
        session_storage: KeyValueStorage,
        namespace_prefix: str = "sb-",
        admin_plan: str = Plan.administrator,
    ) -> None:
        self._gateway = gateway
        self._profiles = profiles
        self._durable_storage = durable_storage
        self._session_storage = session_storage
        self._namespace_prefix = namespace_prefix
        self._admin_plan = admin_plan

        self._state = AuthState()
        self._initial_resolution_done = False
        self._generation = 0
        self._closed = False
        self._subscription: Subscription | None = None
        self._listeners: list[StateListener] = []

    # -- read-only state ------------------------------------------------------

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def session(self) -> Session | None:
        return self._state.session

    @property
    def user(self) -> CompositeUser | None:
        return self._state.user

    @property
    def is_admin(self) -> bool:
        return self._state.is_admin

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def initial_resolution_done(self) -> bool:
        return self._initial_resolution_done

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # -- lifecycle --------------------------------------------------------------

    async def start(self) -> AuthState:
        if self._closed:
            raise RuntimeError("session synchronizer is closed")
        if self._subscription is not None:
            return self._state

        log.info("session_sync_starting")
        self._subscription = self._gateway.on_session_change(self._on_session_change)
        try:
            current = await self._gateway.get_current_session()
        except GatewayError as e:
            log.warning(
                "initial_session_query_failed",
                kind=str(e.kind),
                error=e.message,
                status_code=e.status_code,
            )
            current = None
        except OSError as e:
            log.error("initial_session_storage_failed", error=str(e))
            current = None
        await self.resolve(current, initial=True)
        return self._state

    async def close(self) -> None:
        self._closed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()
        log.info("session_sync_closed")

    async def __aenter__(self) -> SessionSynchronizer:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -- resolution -------------------------------------------------------------

    async def _on_session_change(self, event: SessionEvent, session: Session | None) -> None:
        log.info("session_change_received", auth_event=str(event), has_session=session is not None)
        await self.resolve(session)

    async def resolve(self, session: Session | None, *, initial: bool = False) -> None:
        self._generation += 1
        generation = self._generation

        user = await self._compose_user(session)

        if self._closed:
            log.debug("resolution_discarded", reason="closed")
            return
        if generation != self._generation:
            log.debug("resolution_discarded", reason="superseded", generation=generation)
            return

        loading = self._state.loading
        if initial or not self._initial_resolution_done:
            loading = False
            self._initial_resolution_done = True

        self._publish(
            AuthState(
                session=session,
                user=user,
                is_admin=user is not None
                and is_admin_profile(user.profile, admin_plan=self._admin_plan),
                loading=loading,
            )
        )

    async def _compose_user(self, session: Session | None) -> CompositeUser | None:
        if session is None or session.identity is None:
            log.info("no_session_clearing_user")
            return None

        identity = session.identity
        try:
            profile = await self._profiles.get_profile(identity.id)
        except ProfileLookupError as e:
            log.warning(
                "profile_lookup_failed",
                user_id=identity.id,
                reason=e.reason,
                detail=e.detail,
            )
            return CompositeUser(identity=identity, profile=None)
        return CompositeUser(identity=identity, profile=profile)

    # -- operations ---------------------------------------------------------------

    async def logout(self) -> None:
        try:
            current = await self._gateway.get_current_session()
            if current is None:
                log.info("logout_without_active_session")
            else:
                await self._gateway.sign_out()
        except GatewayError as e:
            if e.is_benign_sign_out:
                log.info("logout_session_already_cleared")
            else:
                log.error(
                    "logout_failed",
                    kind=str(e.kind),
                    error=e.message,
                    status_code=e.status_code,
                )
        except OSError as e:
            log.error("logout_storage_failed", error=str(e))
        finally:
            self._reset_local()

    async def clear_all_sessions(self) -> None:
        log.info("clear_all_sessions_started")
        try:
            await self._gateway.sign_out()
        except GatewayError as e:
            if e.is_benign_sign_out:
                log.info("clear_all_sessions_no_remote_session")
            else:
                log.warning(
                    "clear_all_sessions_sign_out_failed",
                    kind=str(e.kind),
                    error=e.message,
                    status_code=e.status_code,
                )
        except OSError as e:
            log.error("clear_all_sessions_storage_failed", error=str(e))

        removed: list[str] = []
        for storage in (self._durable_storage, self._session_storage):
            try:
                removed.extend(purge_namespace(storage, self._namespace_prefix))
            except OSError as e:
                log.error("storage_purge_failed", error=str(e))

        self._reset_local()
        self._initial_resolution_done = False
        log.info("clear_all_sessions_completed", removed_keys=len(removed))

    def _reset_local(self) -> None:
        # Advancing the generation discards any resolution still in flight.
        self._generation += 1
        self._publish(AuthState(loading=False))

    def _publish(self, state: AuthState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)


# --- Module Notes -----------------------------------------------------------
# There is no error terminal state: every applied resolution carries a definite triple, and
# `loading` only ever moves from True to False.
