import re


def redact_pii(message: str) -> str:
    """Redact personally identifiable information from log messages.

    Sanitizes emails, API keys, bearer tokens and passwords so that contact
    submissions and delivery secrets never reach the log sink in clear text.
    """
    if not isinstance(message, str):
        return str(message)

    # Emails: user@example.com -> u***@example.com
    message = re.sub(
        r"[\w.+-]+@[\w.-]+\.\w+",
        lambda m: m.group()[0] + "***@" + m.group().split("@")[1],
        message,
    )

    # Bearer tokens: "Bearer abc..." -> "Bearer [TOKEN_REDACTED]"
    message = re.sub(
        r"(Bearer\s+)[A-Za-z0-9._~+/=-]+",
        r"\1[TOKEN_REDACTED]",
        message,
        flags=re.IGNORECASE,
    )

    # Resend API keys: re_xxxxxxxx
    message = re.sub(r"\bre_[A-Za-z0-9_]{8,}\b", "[API_KEY_REDACTED]", message)

    # API Keys: long hex strings (32+ chars)
    message = re.sub(r"\b[a-fA-F0-9]{32,}\b", "[API_KEY_REDACTED]", message)

    # Password values in common patterns
    message = re.sub(
        r'(password|passwd|pwd|secret|api_key)["\']?\s*[:=]\s*["\']?[^"\'&\s]+',
        r"\1=[REDACTED]",
        message,
        flags=re.IGNORECASE,
    )

    return message
