from __future__ import annotations

import logging

from .transport import Transport
from .types import ChallengeResponse, LoggedInStatus, LoginResponse

logger = logging.getLogger(__name__)


class AuthResource:
    """Challenge/response login and session lifecycle.

    ``start_login`` keeps no local state; the caller carries the returned
    ``session_key`` into ``verify_login`` together with the second factor.
    """

    def __init__(self, transport: Transport):
        self._t = transport

    async def start_login(self, username: str, password: str) -> ChallengeResponse:
        return await self._t.post("/login/start", {"username": username, "password": password})

    async def verify_login(self, challenge_response: str, session_key: str, *, install: bool = True) -> LoginResponse:
        """Answer the login challenge.

        With ``install`` the returned session key becomes this client's
        credential; a missing or empty key leaves the credential untouched.
        """
        data = await self._t.post(
            "/login/verify",
            {"challenge_response": challenge_response, "session_key": session_key},
        )
        if install and isinstance(data, dict):
            new_session = data.get("session_key")
            if isinstance(new_session, str) and new_session:
                self._t.set_session_id(new_session)
                logger.debug("Session installed after login verification")
        return data

    async def touch_session(self) -> LoggedInStatus:
        return await self._t.put("/login")

    async def logout(self) -> LoggedInStatus:
        try:
            return await self._t.delete("/login")
        finally:
            # The local session is dropped whatever the server says.
            self._t.clear_session()
