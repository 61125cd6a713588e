"""
Platform Auth Client

Thin async wrapper over the hosted platform's auth REST API (GoTrue-compatible).
User calls authenticate with the anon key; admin calls use the service-role key.
"""
import logging
from typing import Optional, Dict, Any
import httpx
from onboarding.modules import settings

logger = logging.getLogger("onboarding.platform_auth")


class PlatformAuthError(Exception):
    """Raised when the platform rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def already_exists(self) -> bool:
        text = self.message.lower()
        return "already exists" in text or "already been registered" in text


class PlatformAuthClient:
    """Client for sign-in, sign-out, session lookup and admin user creation."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        anon_key: Optional[str] = None,
        service_role_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url if base_url is not None else settings.PLATFORM_URL).rstrip("/")
        self.anon_key = anon_key if anon_key is not None else settings.PLATFORM_ANON_KEY
        self.service_role_key = service_role_key if service_role_key is not None else settings.PLATFORM_SERVICE_ROLE_KEY
        self.timeout = timeout or settings.PLATFORM_TIMEOUT
        self._transport = transport

    @property
    def admin_configured(self) -> bool:
        return bool(self.base_url and self.service_role_key)

    def _headers(self, key: Optional[str], bearer: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": key or "",
            "Authorization": f"Bearer {bearer or key or ''}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        headers: Dict[str, str],
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        if not self.base_url:
            raise PlatformAuthError("Platform URL is not configured")

        url = f"{self.base_url}/auth/v1{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, headers=headers, json=json_body, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Platform request {method} {path} failed: {e}")
            raise PlatformAuthError(f"Unable to reach auth platform: {e}", status_code=503)

        if response.status_code >= 400:
            raise PlatformAuthError(self._error_message(response), status_code=response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            logger.error(f"Platform request {method} {path} returned a non-JSON body")
            raise PlatformAuthError("Auth platform returned an unreadable response", status_code=502)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"Auth platform returned {response.status_code}"
        for key in ("msg", "message", "error_description", "error"):
            if isinstance(body, dict) and body.get(key):
                return str(body[key])
        return f"Auth platform returned {response.status_code}"

    async def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        """Exchange e-mail and password for a session."""
        logger.debug(f"[PlatformAuthClient.sign_in_with_password] email={email}")
        return await self._request(
            "POST",
            "/token",
            headers=self._headers(self.anon_key),
            json_body={"email": email, "password": password},
            params={"grant_type": "password"},
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        await self._request("POST", "/logout", headers=self._headers(self.anon_key, bearer=access_token))

    async def get_user(self, access_token: str) -> Dict[str, Any]:
        """Resolve an access token to the platform user it belongs to."""
        return await self._request("GET", "/user", headers=self._headers(self.anon_key, bearer=access_token))

    async def admin_create_user(
        self,
        email: str,
        password: str,
        user_metadata: Optional[Dict[str, Any]] = None,
        email_confirm: bool = True
    ) -> Dict[str, Any]:
        """Create a confirmed login account with the service-role key."""
        if not self.admin_configured:
            raise PlatformAuthError("Missing platform environment variables")

        logger.info(f"Creating new user account for: {email}")
        return await self._request(
            "POST",
            "/admin/users",
            headers=self._headers(self.service_role_key),
            json_body={
                "email": email,
                "password": password,
                "email_confirm": email_confirm,
                "user_metadata": user_metadata or {},
            },
        )


platform_auth = PlatformAuthClient()
