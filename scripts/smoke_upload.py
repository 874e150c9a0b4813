#!/usr/bin/env python3
"""
Quick smoke test against a running uploader.

Checks /health, then uploads a generated 1x1 PNG to /upload using the
configured secret and prints the CloudFront URL.

Usage:
  python scripts/smoke_upload.py [--url http://localhost:3000] [--secret SECRET]

UPLOAD_SECRET from the environment is used when --secret is omitted.
"""

import argparse
import asyncio
import base64
import os
import sys

import httpx

PNG_1X1 = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChAI9jU8FQQAAAABJRU5ErkJggg=="
)


async def run(base_url: str, secret: str | None) -> int:
    async with httpx.AsyncClient(base_url=base_url, timeout=30) as client:
        print("Testing GET /health")
        response = await client.get("/health")
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")
        if response.status_code != 200:
            return 1
        print()

        print("Testing POST /upload")
        data = {"secret": secret} if secret else None
        response = await client.post(
            "/upload",
            files={"file": ("smoke-test.png", PNG_1X1, "image/png")},
            data=data,
        )
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")
        if response.status_code != 200:
            return 1
        print(f"✅ Uploaded: {response.json()['url']}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test a running uploader")
    parser.add_argument(
        "--url", default=f"http://localhost:{os.getenv('PORT', '3000')}", help="Server base URL"
    )
    parser.add_argument("--secret", default=os.getenv("UPLOAD_SECRET"), help="Upload secret")
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args.url, args.secret)))


if __name__ == "__main__":
    main()
