import re

_HF_TOKEN_RE = re.compile(r"hf_[A-Za-z0-9]{20,}")
_BEARER_RE = re.compile(r"(?i)(authorization\s*[:=]\s*bearer\s+)(\S+)")
_URI_CREDS_RE = re.compile(r"([a-z0-9+\-]+://[^:\s/]+:)([^@\s/]+)(@)")


def mask_sensitive(text: str) -> str:
    """Mask hub tokens and credentials before logging/displaying."""
    if not isinstance(text, str):
        return text
    text = _HF_TOKEN_RE.sub("hf_********************", text)
    text = _BEARER_RE.sub(r"\1***", text)
    text = _URI_CREDS_RE.sub(r"\1***\3", text)
    return text


def mask_secret(value: str, keep: int = 4) -> str:
    if not value:
        return ""
    if len(value) <= keep * 2:
        return "*" * len(value)
    return f"{value[:keep]}{'*' * 8}{value[-keep:]}"


def split_csv(value):
    """Split a comma-separated string, dropping blank entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
