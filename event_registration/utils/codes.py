# event_registration/utils/codes.py
import secrets
import string

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_confirmation_code(length: int = 9) -> str:
    """Generates a random alphanumeric code, dashed every 3 characters: A5D-G8K-9B1."""
    code = "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))
    return "-".join(code[i : i + 3] for i in range(0, len(code), 3))


def generate_invite_token() -> str:
    """Opaque token carried in personalised registration links."""
    return secrets.token_hex(16)


def generate_import_batch_id() -> str:
    return secrets.token_hex(5)
