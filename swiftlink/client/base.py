import httpx
from pydantic import ValidationError

from swiftlink.client.errors import RequestError, UnexpectedResponse


def check_status(response: httpx.Response) -> httpx.Response:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise RequestError(
            f"{response.request.method} {response.request.url} failed with status {response.status_code}",
            status_code=response.status_code,
        ) from e
    return response


def parse_body(response: httpx.Response, model):
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise UnexpectedResponse(f"Malformed response body: {e}") from e


def redirect_location(response: httpx.Response) -> str:
    if not 300 <= response.status_code < 400:
        check_status(response)
        raise UnexpectedResponse(f"Expected a redirect, got status {response.status_code}")
    location = response.headers.get("Location")
    if not location:
        raise UnexpectedResponse("Redirect location header not found")
    return location
