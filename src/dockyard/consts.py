"""Constants for Dockyard"""

# ==================== File Paths ====================
DATA_DIR_DEFAULT = "data"
LOG_FILE_DEFAULT = "data/dockyard.log"
TOKEN_FILE_DEFAULT = "data/credentials.json"

# ==================== HTTP ====================
TIMEOUT_HTTP_REQUEST = 30  # seconds
API_KEY_HEADER = "x-api-key"
LOGIN_PATH = "/login"
HTTP_UNAUTHORIZED = 401
HTTP_UNPROCESSABLE = 422

# ==================== Credential Keys ====================
ACCESS_TOKEN_KEY = "jwt_access_token"
USER_KEY = "_user"

# ==================== Model/Provider Pairs ====================
# model path -> provider path, one entry per default/backup pair
MODEL_PROVIDER_PAIRS = {
    "config.default_model": "config.default_provider",
    "config.backup_model": "config.backup_provider",
}
PROVIDER_MODEL_PAIRS = {v: k for k, v in MODEL_PROVIDER_PAIRS.items()}

ACTIVE_STATUS = "active"

# ==================== API Paths ====================
URLS = {
    # Core endpoints
    "SUMMARIZATION": "/api/v1/summarization",
    "INFERENCE": "/api/v1/inference",
    "EMBEDDING": "/api/v1/embedding",
    "OCR": "/api/v1/ocr",
    "CHAT": "/api/v1/chat",
    "CHAT_COMPLETION": "/api/v1/chat/completion",
    # Auth
    "LOGIN": "/api/v1/auth/login",
    "USER_INFO": "/api/v1/auth/user",
    # Organization
    "ORGANIZATIONS": "/api/v1/organizations/",
    "USER_ORGANIZATIONS": "/api/v1/user/organizations",
    # Project
    "PROJECTS": "/api/v1/projects",
    "PROJECTS_SETUP": "/api/v1/projects/setup/",
    "PROJECT_UPDATE": "/api/v1/projects/update",
    "USER_PROJECTS": "/api/v1/user/projects",
    "USAGE": "/api/v1/usage",
    "ORG_USAGE": "/api/v1/usage/organization",
    # Service management
    "SERVICES": "/api/v1/services",
    "MODELS": "/api/v1/models",
    "PROVIDERS": "/api/v1/providers",
    "MODELS_BY_PROVIDER": "/api/v1/models/by-provider",
    # Agent builder
    "AGENT_SETUP": "/api/v1/agent/setup",
    "AGENT_PREVIEW": "/api/v1/agent/preview",
    "AGENT_CONFIG": "/api/v1/agent/config",
    "MCP_STATUS": "/api/v1/mcp/status",
    # Knowledge base
    "KB_INIT": "/api/v1/kb/init",
    "KB_STATUS": "/api/v1/kb/status",
    # Users
    "USERS": "/api/v1/users",
    "MEMBERS_ADD": "/api/v1/members/add",
}

# ==================== Widget Embed ====================
REACT_UMD_URL = "https://unpkg.com/react@18/umd/react.production.min.js"
REACT_DOM_UMD_URL = "https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"
WIDGET_ELEMENT = "shiprocket-agent-widget"
