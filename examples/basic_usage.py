#!/usr/bin/env python3
"""
Basic Usage Example

This example shows how to build authenticated clients for an in-process
FastAPI application, in both test identity mode and bearer token mode.

Usage:
    python examples/basic_usage.py

Requirements:
    - testclient-auth installed (pip install -e .)
"""

from fastapi import FastAPI, Request

from testclient_auth import AppFactory, create_test_client

app = FastAPI()


@app.get("/whoami")
async def whoami(request: Request):
    """Report the identity headers a test authentication handler would read."""
    roles = request.headers.get("authorizationroles")
    return {
        "scheme": request.headers.get("authorization"),
        "user_id": request.headers.get("authorizationuserid"),
        "email": request.headers.get("authorizationemail"),
        "roles": roles.split(",") if roles else [],
    }


def main():
    with AppFactory(app) as factory:
        print("Test identity mode:")
        client = create_test_client(factory, user_id="u1", email="a@b.com", roles=["admin", "editor"])
        print(f"   {client.get('/whoami').json()}")

        print("Bearer token mode:")
        client = create_test_client(factory, user_id="ignored", token="abc123")
        print(f"   {client.get('/whoami').json()}")


if __name__ == "__main__":
    main()
