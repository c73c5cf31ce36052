from pydantic import AnyUrl, TypeAdapter, ValidationError

from swiftlink.core.exceptions import InvalidURL

# Bytes of UTF-8, keeps the unique url index entry within engine key limits
MAX_URL_LENGTH = 2048

_url_adapter = TypeAdapter(AnyUrl)


def validate_url(value: str) -> None:
    """
    Accept only absolute URLs that carry a host, e.g. ``https://example.com/a``.
    Strings like ``mailto:user@example.com`` or ``not a url`` are rejected.
    """
    if not isinstance(value, str) or not value:
        raise InvalidURL("Invalid URL")
    if len(value.encode("utf-8")) > MAX_URL_LENGTH:
        raise InvalidURL(f"URL must be less than {MAX_URL_LENGTH} bytes")

    try:
        parsed = _url_adapter.validate_python(value)
    except ValidationError:
        raise InvalidURL("Invalid URL")

    if not parsed.host:
        raise InvalidURL("URL must have a host")
