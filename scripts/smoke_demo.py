from __future__ import annotations

import argparse
import json
import time
import urllib.error
import urllib.request

SAMPLE_CARD = {"id": "smoke", "name": "Smoke Test", "fields": {"caption": "Ash & ember"}}


def fetch(url: str, payload: object | None = None) -> tuple[int, bytes]:
    data = None if payload is None else json.dumps(payload).encode("utf-8")
    req = urllib.request.Request(url, data=data, method="GET" if data is None else "POST")
    if data is not None:
        req.add_header("Content-Type", "application/json")
    with urllib.request.urlopen(req, timeout=10) as resp:
        return resp.status, resp.read()


def wait_for(url: str, timeout: int) -> bytes:
    deadline = time.time() + timeout
    last_error: Exception | None = None
    while time.time() < deadline:
        try:
            status, body = fetch(url)
            if status == 200:
                return body
        except (urllib.error.URLError, ConnectionError) as exc:
            last_error = exc
        time.sleep(1)
    raise RuntimeError(f"Timed out waiting for {url}: {last_error}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test for `cards serve`.")
    parser.add_argument("--base", default="http://localhost:8080")
    parser.add_argument("--timeout", type=int, default=60)
    args = parser.parse_args()

    base = args.base.rstrip("/")

    wait_for(f"{base}/health", args.timeout)
    template = json.loads(wait_for(f"{base}/api/template/default", args.timeout))
    if not template.get("root"):
        raise RuntimeError("Default template has no root section")

    status, body = fetch(f"{base}/api/render", {"card": SAMPLE_CARD, "debug": True})
    svg = body.decode("utf-8")
    if status != 200 or "Smoke Test" not in svg or "DEBUG RENDER" not in svg:
        raise RuntimeError("Card render did not return the expected SVG")

    status, body = fetch(
        f"{base}/api/template/preview",
        {"template": template, "selection": {"type": "section", "id": "header"}},
    )
    if status != 200 or b'data-section-id="header"' not in body:
        raise RuntimeError("Template preview did not outline the header section")

    print("Smoke test passed.")


if __name__ == "__main__":
    main()
