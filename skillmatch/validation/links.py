"""Placeholder link detection."""

PLACEHOLDER_URL_PATTERNS = (
    "example.com",
    "test.com",
    "placeholder",
    "fake",
    "demo.com",
    "localhost",
)

PLACEHOLDER_URL_ISSUE = (
    "Submission contains a placeholder or fake URL. Please provide a real project link."
)


def has_placeholder_url(url: str) -> bool:
    lowered = url.lower()
    return any(pattern in lowered for pattern in PLACEHOLDER_URL_PATTERNS)
