"""Shared constants for sitedeploy."""

from pathlib import Path

# Remote nginx layout (Debian/Ubuntu packaging)
NGINX_SITES_AVAILABLE = "/etc/nginx/sites-available"
NGINX_SITES_ENABLED = "/etc/nginx/sites-enabled"
NGINX_DEFAULT_SITE = "default"

# Document root used when no explicit one is configured
DOCUMENT_ROOT_PATTERN = "/var/www/{site}"

# Local API service the /api/ prefix is forwarded to
DEFAULT_UPSTREAM = "http://127.0.0.1:3000"
API_PREFIX = "/api/"

# Packages installed when nginx is missing on the target
REMOTE_PACKAGES = ("nginx", "certbot", "python3-certbot-nginx")

# Rendered config policy
LISTEN_PORT = 80
SECURITY_HEADERS = (
    ("X-Frame-Options", "SAMEORIGIN"),
    ("X-Content-Type-Options", "nosniff"),
    ("X-XSS-Protection", "1; mode=block"),
    ("Referrer-Policy", "strict-origin-when-cross-origin"),
)
GZIP_TYPES = ("text/css", "application/javascript", "text/html", "application/json")
GZIP_MIN_LENGTH = 256
STATIC_ASSET_EXTENSIONS = ("css", "js", "png", "jpg", "jpeg", "gif", "ico", "svg", "woff", "woff2")
STATIC_ASSET_EXPIRES = "30d"
STATIC_ASSET_CACHE_CONTROL = "public, immutable"

# SSH
DEFAULT_SSH_USER = "root"
DEFAULT_SSH_PORT = 22
DEFAULT_CONNECT_TIMEOUT = 15
DEFAULT_COMMAND_TIMEOUT = 900

# Local state / audit
STATE_DIR = Path.home() / ".local" / "state" / "sitedeploy"
AUDIT_JSONL_NAME = "audit.jsonl"
AUDIT_DB_NAME = "audit.db"
