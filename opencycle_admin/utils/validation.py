import uuid


def coerce_uuid(value: object) -> uuid.UUID | None:
    """
    Interpret a value as a UUID, returning None when it is not one.

    Accepts UUID instances and their string forms (hyphenated, braced or bare hex).

    Examples:
        coerce_uuid("0b3a...") -> UUID("0b3a...")
        coerce_uuid("not-an-id") -> None
        coerce_uuid(None) -> None
    """
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def mask_email(email: str) -> str:
    """
    Mask an email address for safe logging.
    Example: 'user@example.com' -> 'u***r@example.com'
    """
    try:
        user_part, domain = email.split("@")
        if len(user_part) <= 2:
            return f"{user_part[0]}***@{domain}"
        return f"{user_part[0]}***{user_part[-1]}@{domain}"
    except Exception:
        return "***@***.***"
