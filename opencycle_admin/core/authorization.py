"""Administrator predicate.

Who counts as an administrator is decided purely from the caller's email address:
either the designated admin address, or any address on the admin subdomain.
"""


def is_admin_email(email: str | None, admin_email: str, admin_domain: str) -> bool:
    """
    Decide whether an email address belongs to an administrator.

    Parameters:
        email (str | None): Email of the resolved caller; `None` or empty never matches.
        admin_email (str): The designated admin address, matched exactly.
        admin_domain (str): The admin subdomain; any address ending in `@<admin_domain>` matches.

    Returns:
        bool: True if the caller is an administrator.
    """
    if not email:
        return False
    if email == admin_email:
        return True
    # A bare "@domain" has no local part and is not an account
    local_part, at, domain = email.rpartition("@")
    return bool(at) and bool(local_part) and bool(admin_domain) and domain == admin_domain
