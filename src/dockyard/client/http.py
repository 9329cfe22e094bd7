"""REST client for the Dockyard gateway.

Every call returns either the parsed response body or an error value
(``FEError`` / ``APIError``); nothing network-related is raised. Two statuses
get special treatment:

* 401 clears stored credentials and notifies ``on_unauthorized``
* 422 extracts field-level errors and passes them to validation listeners
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

import requests

from ..consts import (
    API_KEY_HEADER,
    HTTP_UNAUTHORIZED,
    HTTP_UNPROCESSABLE,
    LOGIN_PATH,
    TIMEOUT_HTTP_REQUEST,
)
from ..errors import ClientError
from ..utils import sanitize
from .results import APIError, FEError, ValidationErrorDetail, extract_validation_errors
from .token_store import TokenStore

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

UnauthorizedHandler = Callable[[str], None]
ValidationListener = Callable[[ValidationErrorDetail], None]


def parse_response(response: requests.Response) -> Any:
    """JSON when the content type says so (``None`` for an empty body), text otherwise."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError:
            return None
    return response.text


class DockyardClient:
    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        token_store: TokenStore | None = None,
        timeout: int = TIMEOUT_HTTP_REQUEST,
        extra_headers: Mapping[str, str] | None = None,
        login_path: str = LOGIN_PATH,
        on_unauthorized: UnauthorizedHandler | None = None,
        on_validation_error: ValidationListener | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Gateway root, e.g. ``https://gateway.example.com``
            api_key: Static API key sent on every request
            token_store: Where the bearer token is read from and cleared on 401
            timeout: Per-request timeout in seconds
            extra_headers: Headers added to every request
            login_path: Passed to ``on_unauthorized`` so the caller can redirect
            on_unauthorized: Called after credentials are cleared on a 401
            on_validation_error: First validation listener (more via ``subscribe``)
            session: Reuse an existing ``requests.Session``
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.token_store = token_store if token_store is not None else TokenStore()
        self.timeout = timeout
        self.extra_headers = dict(extra_headers or {})
        self.login_path = login_path
        self.on_unauthorized = on_unauthorized
        self.session = session or requests.Session()
        self._validation_listeners: list[ValidationListener] = []
        if on_validation_error:
            self.subscribe(on_validation_error)

        logger.debug(
            f"DockyardClient initialized: base_url={self.base_url}, "
            f"api_key={sanitize(api_key)}, timeout={timeout}"
        )

    @classmethod
    def from_config(cls, cfg, **kwargs) -> "DockyardClient":
        kwargs.setdefault("token_store", TokenStore(cfg.token_path()))
        return cls(
            base_url=str(cfg.api.base_url),
            api_key=cfg.api.api_key,
            timeout=cfg.api.timeout,
            extra_headers=cfg.api.extra_headers,
            login_path=cfg.auth.login_path,
            **kwargs,
        )

    def subscribe(self, listener: ValidationListener) -> Callable[[], None]:
        """Register a 422 listener; the returned callable unregisters it."""
        self._validation_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._validation_listeners:
                self._validation_listeners.remove(listener)

        return unsubscribe

    def build_headers(self, multipart: bool = False) -> dict[str, str]:
        headers = {}
        if not multipart:
            headers["Content-Type"] = "application/json"
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key
        token = self.token_store.access_token
        if token:
            headers["authorization"] = f"Bearer {token}"
        headers.update(self.extra_headers)
        return headers

    def url(self, path: str) -> str:
        if not path:
            raise ClientError("Endpoint path cannot be empty")
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}{path if path.startswith('/') else '/' + path}"

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        files: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        method = method.upper()
        if method not in METHODS:
            raise ClientError(f"Unsupported HTTP method: {method}")

        url = self.url(path)
        kwargs: dict[str, Any] = {
            "headers": self.build_headers(multipart=files is not None),
            "timeout": self.timeout,
        }
        if params:
            kwargs["params"] = params
        if method != "GET":
            if files is not None:
                kwargs["files"] = files
                if body is not None:
                    kwargs["data"] = body
            elif body is not None:
                kwargs["json"] = body

        try:
            logger.debug(f"{method} {url}")
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            return FEError(error=str(e), exception=e)

        if response.status_code == HTTP_UNAUTHORIZED:
            return self._handle_unauthorized(response)

        if not response.ok:
            return self._handle_api_error(response)

        return parse_response(response)

    def _handle_unauthorized(self, response: requests.Response) -> APIError:
        logger.warning("Gateway rejected credentials (401)")
        self.token_store.clear_credentials()
        if self.on_unauthorized:
            self.on_unauthorized(self.login_path)
        return APIError(status=response.status_code, payload=parse_response(response))

    def _handle_api_error(self, response: requests.Response) -> APIError:
        payload = parse_response(response)
        error = APIError(status=response.status_code, payload=payload)
        logger.info(f"Gateway returned {response.status_code} for {response.url}")

        if response.status_code == HTTP_UNPROCESSABLE:
            detail = extract_validation_errors(response.status_code, payload)
            error.validation = detail
            for listener in list(self._validation_listeners):
                listener(detail)

        return error

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any = None, files: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("POST", path, body=body, files=files)

    def put(self, path: str, body: Any = None) -> Any:
        return self.request("PUT", path, body=body)

    def patch(self, path: str, body: Any = None) -> Any:
        return self.request("PATCH", path, body=body)

    def delete(self, path: str, body: Any = None) -> Any:
        return self.request("DELETE", path, body=body)
