"""Endpoint groups of the gateway API.

Thin wrappers: each method builds a path and body and returns whatever
``DockyardClient`` returns (parsed body or error value).
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Literal, Optional
from urllib.parse import quote

from ..catalog import ModelRow, ProviderRow, parse_models, parse_providers
from ..consts import URLS
from ..enums import MemberRole
from ..errors import AuthException
from ..utils import to_query_string
from .http import DockyardClient
from .results import is_error, unwrap

logger = logging.getLogger(__name__)

AccessType = Literal["read", "write", "admin"]
OcrFileType = Literal["image", "pdf"]


def _q(value: str) -> str:
    return quote(str(value), safe="")


class _Endpoints:
    def __init__(self, client: DockyardClient):
        self.client = client


class AuthEndpoints(_Endpoints):
    def login(self, email: str, password: str) -> Any:
        return self.client.post(URLS["LOGIN"], {"email": email, "password": password})

    def user_info(self) -> Any:
        return self.client.get(URLS["USER_INFO"])

    def sign_in(self, email: str, password: str) -> dict:
        """Log in and persist the session token.

        Raises:
            AuthException: If the gateway rejects the login or sends no token
        """
        result = self.login(email, password)
        if is_error(result) or not isinstance(result, dict) or result.get("success") is not True:
            raise AuthException("Login failed")

        data = result.get("data") or {}
        access_token = data.get("access_token")
        if not access_token:
            raise AuthException("Access token not found in response")

        self.client.token_store.save_session(access_token, data.get("user"))
        logger.info(f"Signed in as {email}")
        return data

    def sign_out(self) -> None:
        self.client.token_store.clear_credentials()


class OrganizationEndpoints(_Endpoints):
    def list(self, active_only: bool = False) -> Any:
        path = URLS["ORGANIZATIONS"]
        return self.client.get(f"{path}?active_only=true" if active_only else path)

    def for_user(self) -> Any:
        return self.client.get(URLS["USER_ORGANIZATIONS"])

    def get(self, org_id: str) -> Any:
        return self.client.get(f"{URLS['ORGANIZATIONS'].rstrip('/')}/{_q(org_id)}")

    def create(self, name: str, description: str | None = None, active: bool = True) -> Any:
        body = {"name": name, "active": active}
        if description is not None:
            body["description"] = description
        return self.client.post(URLS["ORGANIZATIONS"], body)

    def update(self, org_id: str, **changes: Any) -> Any:
        return self.client.put(f"{URLS['ORGANIZATIONS'].rstrip('/')}/{_q(org_id)}", changes)

    def remove(self, org_id: str) -> Any:
        return self.client.delete(f"{URLS['ORGANIZATIONS'].rstrip('/')}/{_q(org_id)}")


class ProjectEndpoints(_Endpoints):
    def create(
        self,
        name: str,
        organization_id: str,
        description: str | None = None,
        cost_limits: dict | None = None,
        services: list[dict] | None = None,
        active: bool = True,
    ) -> Any:
        body: dict[str, Any] = {"name": name, "organization_id": organization_id, "active": active}
        if description is not None:
            body["description"] = description
        if cost_limits:
            body["cost_limits"] = cost_limits
        if services:
            body["services"] = services
        return self.client.post(URLS["PROJECTS_SETUP"], body)

    def list(self) -> Any:
        return self.client.get(URLS["PROJECTS"])

    def for_user(self) -> Any:
        return self.client.get(URLS["USER_PROJECTS"])

    def by_organization(self, organization_id: str) -> Any:
        return self.client.get(f"{URLS['PROJECTS']}/by-organization?organization_id={_q(organization_id)}")

    def details(self, project_id: str) -> Any:
        return self.client.get(f"{URLS['PROJECTS']}?project_id={_q(project_id)}")

    def update(self, project_id: str, name: str, **changes: Any) -> Any:
        return self.client.put(URLS["PROJECT_UPDATE"], {"project_id": project_id, "name": name, **changes})

    def services(self, project_id: str) -> Any:
        return self.client.get(f"{URLS['PROJECTS']}/{_q(project_id)}/services")

    def add_service(self, project_id: str, body: dict) -> Any:
        return self.client.post(f"{URLS['PROJECTS']}/{_q(project_id)}/services", body)

    def generate_api_key(self, project_id: str, body: dict | None = None) -> Any:
        return self.client.post(f"{URLS['PROJECTS']}/{_q(project_id)}/api-key/generate", body or {})

    def delete_api_key(self, project_id: str, name: str) -> Any:
        return self.client.delete(f"{URLS['PROJECTS']}/{_q(project_id)}/api-key/delete", {"name": name})

    def usage(
        self,
        start_date: str,
        end_date: str,
        project_id: str | None = None,
        organization_id: str | None = None,
    ) -> Any:
        params = {
            "project_id": project_id,
            "organization_id": organization_id,
            "start_date": start_date,
            "end_date": end_date,
        }
        return self.client.get(URLS["PROJECTS"] + to_query_string(params))


class UsageEndpoints(_Endpoints):
    def org_by_project(self, organization_id: str, start_date: str, end_date: str) -> Any:
        return self._org(organization_id, "project", start_date, end_date)

    def org_by_service(self, organization_id: str, start_date: str, end_date: str) -> Any:
        return self._org(organization_id, "service", start_date, end_date)

    def _org(self, organization_id: str, group_by: str, start_date: str, end_date: str) -> Any:
        query = to_query_string({"group_by": group_by, "start_date": start_date, "end_date": end_date})
        return self.client.get(f"{URLS['ORG_USAGE']}/{_q(organization_id)}{query}")

    def project_range(self, project_id: str, start_date: str, end_date: str) -> Any:
        query = to_query_string(
            {"scope": "project", "project_id": project_id, "start_date": start_date, "end_date": end_date}
        )
        return self.client.get(URLS["USAGE"] + query)

    def org_daywise(self, organization_id: str, start_date: str, end_date: str) -> Any:
        query = to_query_string(
            {
                "scope": "org",
                "organization_id": organization_id,
                "type": "daywise",
                "start_date": start_date,
                "end_date": end_date,
            }
        )
        return self.client.get(URLS["USAGE"] + query)

    def org_month_to_date(self, organization_id: str, start_date: str, end_date: str) -> Any:
        query = to_query_string(
            {
                "scope": "org",
                "organization_id": organization_id,
                "type": "mtd",
                "start_date": start_date,
                "end_date": end_date,
            }
        )
        return self.client.get(URLS["USAGE"] + "/" + query)

    def project_month_to_date(self, project_id: str) -> Any:
        query = to_query_string({"scope": "project", "project_id": project_id, "type": "mtd"})
        return self.client.get(URLS["USAGE"] + query)


class ServiceCatalogEndpoints(_Endpoints):
    def services(self) -> Any:
        return self.client.get(URLS["SERVICES"])

    def models(self) -> Any:
        return self.client.get(URLS["MODELS"])

    def providers(self) -> Any:
        return self.client.get(URLS["PROVIDERS"])

    def models_by_provider(self, provider: str) -> Any:
        return self.client.get(f"{URLS['MODELS_BY_PROVIDER']}/{_q(provider)}")

    def load_catalog(self) -> tuple[list[ModelRow], list[ProviderRow]]:
        """Fetch models and providers for form option resolution.

        A failed fetch yields an empty list for that side; nothing is cached.
        """
        models = unwrap(self.models(), default=[])
        providers = unwrap(self.providers(), default=[])
        return (
            parse_models(m for m in models or [] if isinstance(m, dict)),
            parse_providers(p for p in providers or [] if isinstance(p, dict)),
        )


class PlaygroundEndpoints(_Endpoints):
    def summarize(self, user_prompt: str, model: str, provider: str, **options: Any) -> Any:
        return self.client.post(
            URLS["SUMMARIZATION"],
            {"user_prompt": user_prompt, "model": model, "provider": provider, **options},
        )

    def embed(self, text: str | list[str], model: str, provider: str) -> Any:
        return self.client.post(URLS["EMBEDDING"], {"text": text, "model": model, "provider": provider})

    def ocr(self, file: BinaryIO, file_type: OcrFileType, model: str, provider: str, filename: str = "upload") -> Any:
        return self.client.post(
            URLS["OCR"],
            body={"file_type": file_type, "model": model, "provider": provider},
            files={"file": (filename, file)},
        )

    def chat_completion(self, user_prompt: str, model: str, provider: str, **options: Any) -> Any:
        return self.client.post(
            URLS["CHAT_COMPLETION"],
            {"user_prompt": user_prompt, "model": model, "provider": provider, **options},
        )

    def chatbot(
        self,
        query: str,
        model: str,
        provider: str,
        rag_limit: int | None = None,
        rag_threshold: float | None = None,
    ) -> Any:
        return self.client.post(
            URLS["CHAT"],
            {
                "query": query,
                "model": model,
                "provider": provider,
                "rag_limit": rag_limit,
                "rag_threshold": rag_threshold,
            },
        )

    def inference(self, user_prompt: str, **options: Any) -> Any:
        return self.client.post(URLS["INFERENCE"], {"user_prompt": user_prompt, **options})


class AgentBuilderEndpoints(_Endpoints):
    def add_project_service(self, project_id: str, body: dict) -> Any:
        return self.client.post(f"{URLS['PROJECTS']}/{_q(project_id)}/services", body)

    def check_mcp_status(self, url: str) -> Any:
        return self.client.post(URLS["MCP_STATUS"], {"url": url})

    def agent_config(self, project_id: str) -> Any:
        return self.client.get(f"{URLS['AGENT_CONFIG']}?project_id={_q(project_id)}")

    def setup_agent(self, payload: dict) -> Any:
        return self.client.post(URLS["AGENT_SETUP"], payload)

    def submit_widget_config(self, project_id: str, config: dict) -> Any:
        return self.client.post(URLS["AGENT_PREVIEW"], {"project_id": project_id, "config": config})


class KnowledgeBaseEndpoints(_Endpoints):
    def init(
        self,
        project_id: str,
        file: BinaryIO,
        filename: str,
        chunking_size: int = 1000,
        overlapping_size: int = 200,
        collection_name: Optional[str] = None,
    ) -> Any:
        form = {
            "project_id": project_id,
            "chunking_size": str(chunking_size),
            "overlapping_size": str(overlapping_size),
        }
        if collection_name:
            form["collection_name"] = collection_name
        return self.client.post(URLS["KB_INIT"], body=form, files={"file": (filename, file)})

    def status(self, project_id: str) -> Any:
        return self.client.get(f"{URLS['KB_STATUS']}/{_q(project_id)}")


class UserEndpoints(_Endpoints):
    def list(self, name: str | None = None, page: int | None = None, limit: int | None = None) -> Any:
        params = {k: v for k, v in {"name": name, "page": page, "limit": limit}.items() if v not in (None, "")}
        return self.client.get(URLS["USERS"] + (to_query_string(params) if params else ""))

    def add_member(self, payload: dict) -> Any:
        return self.client.post(URLS["MEMBERS_ADD"], payload)

    def add_admin(self, email: str) -> Any:
        return self.add_member({"email": email, "role": MemberRole.ADMIN.value})

    def add_owner(self, email: str, organization_id: str) -> Any:
        return self.add_member(
            {"email": email, "role": MemberRole.OWNER.value, "organization_id": organization_id}
        )

    def add_project_member(
        self,
        email: str,
        organization_id: str,
        project_id: str,
        access_type: AccessType = "read",
    ) -> Any:
        return self.add_member(
            {
                "email": email,
                "role": MemberRole.MEMBER.value,
                "organization_id": organization_id,
                "project_id": project_id,
                "access_type": access_type,
            }
        )


class Gateway:
    """All endpoint groups over one client."""

    def __init__(self, client: DockyardClient):
        self.client = client
        self.auth = AuthEndpoints(client)
        self.organizations = OrganizationEndpoints(client)
        self.projects = ProjectEndpoints(client)
        self.usage = UsageEndpoints(client)
        self.catalog = ServiceCatalogEndpoints(client)
        self.playground = PlaygroundEndpoints(client)
        self.agent = AgentBuilderEndpoints(client)
        self.kb = KnowledgeBaseEndpoints(client)
        self.users = UserEndpoints(client)

    @classmethod
    def from_config(cls, cfg, **kwargs) -> "Gateway":
        return cls(DockyardClient.from_config(cfg, **kwargs))
