import bcrypt

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt directly with a freshly generated salt.

    bcrypt truncates at 72 *bytes* and this build raises if you exceed it,
    so enforce the limit explicitly.
    """
    if not password:
        raise ValueError("Password is required")

    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > 72:
        raise ValueError("Password must be 72 bytes or less")

    hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        if not password or not hashed:
            return False
        pw_bytes = password.encode("utf-8")
        if len(pw_bytes) > 72:
            return False
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except Exception:
        return False


# Computed once at import so the first unknown-email login is not slower than the rest.
_DUMMY_HASH = hash_password("job_board_timing_dummy")


def verify_password_timing_safe(password: str, hashed: str | None) -> bool:
    """
    Check a login attempt with the same bcrypt cost whether or not the account exists.

    With no stored hash the dummy hash is checked and the result discarded, so
    response time does not reveal which emails are registered.
    """
    if not hashed:
        verify_password(password or "", _DUMMY_HASH)
        return False
    return verify_password(password, hashed)
