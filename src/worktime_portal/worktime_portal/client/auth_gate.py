from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, TypeVar

import requests

from ..core.constants import DEFAULT_UPSTREAM_TIMEOUT, MSG_TOKEN_INVALID
from ..core.enums import GateState, Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SessionContext:
    """Verified user handed down to protected views; the role is resolved once here."""

    user_id: Any
    username: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user_payload(cls, user: Mapping[str, Any]) -> "SessionContext":
        try:
            role = Role(user.get("role"))
        except ValueError:
            raise AuthenticationError(MSG_TOKEN_INVALID)
        username = user.get("username") or ""
        return cls(
            user_id=user.get("id"),
            username=username,
            name=user.get("name") or username,
            role=role,
        )


class TokenStore(Protocol):
    def load(self) -> Optional[str]: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...


class PortalAuthClient:
    """Calls the portal's /auth endpoints on behalf of a client shell."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def login(self, username: str, password: str) -> str:
        response = self._session.post(
            f"{self._base_url}/auth/login",
            json={"username": username, "password": password},
            timeout=self._timeout,
        )
        data = _json_or_empty(response)
        if not response.ok or not data.get("token"):
            raise AuthenticationError(data.get("message") or MSG_TOKEN_INVALID)
        return str(data["token"])

    def verify(self, token: str) -> SessionContext:
        response = self._session.get(
            f"{self._base_url}/auth/verify",
            headers={"Authorization": f"Bearer {token}"},
            timeout=self._timeout,
        )
        if not response.ok:
            raise AuthenticationError(_json_or_empty(response).get("message") or MSG_TOKEN_INVALID)
        user = _json_or_empty(response).get("user")
        if not isinstance(user, dict):
            raise AuthenticationError(MSG_TOKEN_INVALID)
        return SessionContext.from_user_payload(user)


def _json_or_empty(response: requests.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class AuthGate:
    """Guards protected views until a stored token has been verified.

    LOADING -> AUTHENTICATED when the stored token verifies,
    LOADING -> UNAUTHENTICATED when there is no token, it is rejected (the
    token is then removed) or the verify call fails in transport.
    Verification runs once per mount and is never retried automatically.
    """

    def __init__(self, store: TokenStore, auth_client: PortalAuthClient):
        self._store = store
        self._auth_client = auth_client
        self.state = GateState.LOADING
        self.context: Optional[SessionContext] = None

    def mount(self) -> GateState:
        self.state = GateState.LOADING
        self.context = None

        token = self._store.load()
        if not token:
            self.state = GateState.UNAUTHENTICATED
            return self.state

        try:
            self.context = self._auth_client.verify(token)
        except AuthenticationError:
            logger.info("Stored token rejected; clearing it")
            self._store.clear()
            self.state = GateState.UNAUTHENTICATED
            return self.state
        except requests.RequestException as e:
            logger.warning("Token verification failed: %s", e)
            self.state = GateState.UNAUTHENTICATED
            return self.state

        self.state = GateState.AUTHENTICATED
        return self.state

    def on_login(self, token: str) -> GateState:
        self._store.save(token)
        return self.mount()

    def sign_in(self, username: str, password: str) -> GateState:
        return self.on_login(self._auth_client.login(username, password))

    def logout(self) -> None:
        self._store.clear()
        self.context = None
        self.state = GateState.UNAUTHENTICATED

    def render(
        self,
        protected: Callable[[SessionContext], T],
        login: Callable[[], T],
        loading: Optional[Callable[[], T]] = None,
    ) -> Optional[T]:
        if self.state == GateState.LOADING:
            return loading() if loading else None
        if self.state == GateState.UNAUTHENTICATED or self.context is None:
            return login()
        return protected(self.context)


def select_view(context: SessionContext, *, admin: Callable[[SessionContext], T], viewer: Callable[[SessionContext], T]) -> T:
    """Dispatch on the resolved role instead of comparing role strings in each view."""

    if context.role == Role.ADMIN:
        return admin(context)
    return viewer(context)
