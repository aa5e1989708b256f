import hmac


def check_credentials(
        username: str,
        password: str,
        reference_username: str,
        reference_password: str,
) -> bool:
    """
    True when both username and password match the reference values.

    Both comparisons always run and use `hmac.compare_digest`, so the time
    taken does not depend on where the first mismatching character is.
    Empty values are rejected by the caller before this is reached.
    """
    username_ok = hmac.compare_digest(
        username.encode("utf-8"), reference_username.encode("utf-8")
    )
    password_ok = hmac.compare_digest(
        password.encode("utf-8"), reference_password.encode("utf-8")
    )
    return username_ok and password_ok
