"""Secret pattern library and the text-file extension filter."""
import posixpath
import re
from functools import lru_cache
from typing import List, Sequence, Tuple

from hub_scanner.models import SecretPattern

SECRET_PATTERNS: List[SecretPattern] = [
    # API / access tokens
    SecretPattern("Box API Key", r"[0-9a-z]{40}"),
    SecretPattern("Algolia API Key", r"[a-z0-9]{32}"),
    SecretPattern("GitHub PAT", r"ghp_[A-Za-z0-9]{36}"),
    SecretPattern("Zoom JWT Key", r"z0m[A-Za-z0-9]{32,}"),
    SecretPattern("GitLab PAT", r"glpat-[A-Za-z0-9]{20,}"),
    SecretPattern("Netlify API Key", r"ntl_[A-Za-z0-9]{32,}"),
    SecretPattern("Vercel Token", r"vercel_[A-Za-z0-9]{32,}"),
    SecretPattern("Shopify API Key", r"shp_[A-Za-z0-9]{32,}"),
    SecretPattern("Dropbox API Key", r"sl.A[A-Za-z0-9]{32,}"),
    SecretPattern("PayPal Client ID", r"Abcd[A-Za-z0-9]{20,}"),
    SecretPattern("Slack App Token", r"xapp-[A-Za-z0-9]{24,}"),
    SecretPattern("Twilio API Key / SID", r"AC[0-9a-fA-F]{32}"),
    SecretPattern("Anthropic API Key", r"api-[A-Za-z0-9]{32,}"),
    SecretPattern("Datadog API Key", r"ddapikey[A-Za-z0-9]{32,}"),
    SecretPattern("GitHub Actions Token", r"gho_[A-Za-z0-9]{36}"),
    SecretPattern("OpenAI / LLM API Key", r"sk-[A-Za-z0-9]{32,}"),
    SecretPattern("Hugging Face API Key", r"hf_[A-Za-z0-9]{20,}"),
    SecretPattern("Facebook Access Token", r"EAAG[A-Za-z0-9]{30,}"),
    SecretPattern("Stripe Secret Key", r"sk_live_[A-Za-z0-9]{24,}"),
    SecretPattern("Instagram Access Token", r"IGQV[A-Za-z0-9]{30,}"),
    SecretPattern("CircleCI API Token", r"circleci-[A-Za-z0-9]{32,}"),
    SecretPattern("Twitter Bearer Token", r"AAAAAAAA[A-Za-z0-9]{30,}"),
    SecretPattern("Azure Access Key", r"AZURE_STORAGE_KEY_[A-Za-z0-9]{40,}"),
    SecretPattern("Slack Bot Token", r"xoxb-[0-9]{10,}-[0-9]{10,}-[A-Za-z0-9]{24,}"),
    # Cloud / service keys
    SecretPattern("AWS Access Key ID", r"AKIA[0-9A-Z]{16}"),
    SecretPattern("Google API Key", r"AIza[0-9A-Za-z\-_]{35}"),
    SecretPattern("Firebase API Key", r"AAAA[A-Za-z0-9\-_]{7,}"),
    SecretPattern("Google Cloud Service Account Key ID", r"[A-Z0-9]{32}"),
    # Database / connection strings
    SecretPattern("Oracle JDBC", r"jdbc:oracle:thin:@[^\s]+"),
    SecretPattern("Kubernetes Bearer Token", r"eyJhbGciOiJSUzI1Ni[A-Za-z0-9\-_]+"),
    SecretPattern("MySQL URI", r"mysql://(?:[^@\s]+@)?[^\s/:]+(?::\d+)?/[^\s]*"),
    SecretPattern("Redis URI", r"rediss?://(?:[^@\s]+@)?[^\s/:]+(?::\d+)?(?:/\d+)?\b"),
    SecretPattern("JDBC generic", r"jdbc:[a-z0-9]+://(?:[^@\s]+@)?[^\s/:]+(?::\d+)?/[^\s]*"),
    SecretPattern("AMQP / RabbitMQ URI", r"amqps?://(?:[^@\s]+@)?[^\s/:]+(?::\d+)?/?[^\s]*"),
    SecretPattern("Elasticsearch Basic Auth", r"https?://[^:\s]+:[^@\s]+@[^/\s:]+(?::\d+)?/?"),
    SecretPattern("MongoDB URI", r"mongodb(?:\+srv)?://(?:[^@\s]+@)?[^\s/:]+(?::\d+)?/[^\s]*"),
    SecretPattern("PostgreSQL URI", r"postgres(?:ql)?://(?:[^@\s]+@)?[^\s/:]+(?::\d+)?/[^\s]*"),
    SecretPattern("MSSQL URI", r"(?:mssql|sqlserver)://(?:[^@\s]+@)?[^\s/:]+(?::\d+)?/?[^\s]*"),
    SecretPattern("CockroachDB URI", r"cockroach(?:db)?://(?:[^@\s]+@)?[^\s/:]+(?::\d+)?/[^\s]*"),
    SecretPattern("Generic DB URI with creds", r"[a-z0-9+\-]+://[^:\s/]+:[^@\s/]+@[^/\s:]+(?::\d+)?/[^\s]*"),
]

# Findings of these types are surfaced separately on the dashboard.
HIGH_RISK_PATTERNS = frozenset({
    "AWS Access Key ID",
    "GitHub PAT",
    "OpenAI / LLM API Key",
    "Stripe Secret Key",
    "Generic DB URI with creds",
    "PostgreSQL URI",
    "MySQL URI",
    "MongoDB URI",
    "Google API Key",
    "Kubernetes Bearer Token",
    "GitHub Actions Token",
})

TEXT_EXTENSIONS = frozenset({
    # Code
    ".py", ".js", ".jsx", ".ts", ".tsx", ".java", ".cpp", ".c", ".h", ".cs",
    ".go", ".rs", ".rb", ".php", ".mjs", ".sh", ".bash", ".zsh",
    # Web / frontend
    ".html", ".htm", ".ejs", ".vue", ".css", ".scss", ".sass", ".less",
    # Config / data
    ".json", ".yaml", ".yml", ".toml", ".ini", ".cfg", ".conf", ".env",
    ".env.example", ".lock", ".properties", ".dockerfile", ".gitignore",
    ".gitattributes", ".env.local", ".env.dev", ".env.prod", ".env.test",
    ".secrets", ".key", ".pem", ".crt", ".p12", ".jks", ".kdb", ".pub", ".asc",
    ".ini.local", ".yml.local", ".yaml.local", ".docker-compose",
    ".docker-compose.yml",
    # Docs / text
    ".md", ".mdx", ".rst", ".txt", ".log", ".csv", ".tsv", ".ipynb",
})

_COMPOUND_EXTENSIONS = tuple(ext for ext in TEXT_EXTENSIONS if ext.count(".") > 1)


def file_extension(name: str) -> str:
    """Lower-cased suffix from the last dot of the base name, dot included.

    A dot-file such as ``.env`` is its own extension.
    """
    base = posixpath.basename(name or "")
    idx = base.rfind(".")
    if idx < 0:
        return ""
    return base[idx:].lower()


def is_text_file(name: str) -> bool:
    if file_extension(name) in TEXT_EXTENSIONS:
        return True
    lowered = posixpath.basename(name or "").lower()
    return lowered.endswith(_COMPOUND_EXTENSIONS)


@lru_cache(maxsize=None)
def _compile(regex: str) -> re.Pattern:
    return re.compile(regex, re.ASCII)


def compile_patterns(patterns: Sequence[SecretPattern]) -> List[Tuple[SecretPattern, re.Pattern]]:
    """Compile each pattern once; repeated calls reuse the cached objects.

    A malformed expression raises ``re.error`` here, at load time.
    """
    return [(pattern, _compile(pattern.regex)) for pattern in patterns]


def default_patterns() -> List[Tuple[SecretPattern, re.Pattern]]:
    return compile_patterns(SECRET_PATTERNS)
