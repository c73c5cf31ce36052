import secrets
import string

# Base62 alphabet: digits plus upper and lower case letters
ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
DEFAULT_CODE_SIZE = 6


def generate_code(length: int = DEFAULT_CODE_SIZE) -> str:
    """Generate a random alphanumeric code of the given length."""
    if length < 1:
        raise ValueError("code length must be at least 1")
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
