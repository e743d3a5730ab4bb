"""Small helpers for reading HTTP error responses."""
import httpx


def safe_text(response: httpx.Response) -> str:
    """Return the response body, or "" if it cannot be read.

    Used while building an error so that a broken body never hides the
    original status code.
    """
    try:
        return response.text
    except (httpx.StreamError, httpx.HTTPError, UnicodeDecodeError):
        return ""
