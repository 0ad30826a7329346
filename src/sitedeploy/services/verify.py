"""Post-deploy smoke check over plain HTTP."""

from __future__ import annotations

import httpx

from sitedeploy.errors import VerificationError

EXPECTED_HEADERS = {"X-Frame-Options": "SAMEORIGIN"}


def _url_host(host: str) -> str:
    return f"[{host}]" if ":" in host else host


def check_site(host: str, domain: str, *, client: httpx.Client | None = None) -> httpx.Response:
    """GET / from ``host`` with ``Host: domain`` and check status and headers.

    DNS may not point at the host yet, so the request goes to the host
    address directly.
    """
    owns_client = client is None
    client = client or httpx.Client(timeout=30.0)
    try:
        try:
            resp = client.get(f"http://{_url_host(host)}/", headers={"Host": domain})
        except httpx.HTTPError as exc:
            raise VerificationError(f"GET http://{host}/ (Host: {domain}) failed: {exc}") from exc
    finally:
        if owns_client:
            client.close()

    if resp.status_code != 200:
        raise VerificationError(
            f"Expected 200 from http://{host}/ (Host: {domain}), got {resp.status_code}",
            output=resp.text[:500],
        )
    for name, value in EXPECTED_HEADERS.items():
        if resp.headers.get(name) != value:
            raise VerificationError(f"Missing header {name}: {value} (got {resp.headers.get(name)!r})")
    return resp
