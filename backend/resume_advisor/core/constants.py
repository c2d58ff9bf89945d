"""Centralized constants: no magic numbers in service code."""

# Upload limits
MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MB
MAX_UPLOAD_FILES = 1
MAX_FORM_FIELDS = 5
MAX_FIELD_SIZE = 50 * 1024  # 50 KB per text field
PDF_MIME_TYPE = "application/pdf"

# Form field names (shared with the web client)
RESUME_FIELD = "resume"
JOB_DESCRIPTION_FIELD = "jobDescription"

# Truncation
MAX_RESUME_CHARS = 8_000  # chars of extracted resume text sent to the LLM
TRUNCATION_MARKER = "..."

# Upstream LLM (OpenRouter, OpenAI-compatible)
LLM_PROVIDER = "openrouter"
DEFAULT_AI_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_AI_MODEL = "deepseek/deepseek-chat-v3-0324:free"
DEFAULT_SITE_URL = "http://localhost:5173"
UPSTREAM_TIMEOUT = 15.0  # seconds, single attempt
MODELS_CATALOG_URL = "https://openrouter.ai/api/v1/models"

# Server
DEFAULT_PORT = 3001
