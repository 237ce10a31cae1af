"""Shared test fixtures for acmedns."""

import pytest

from acmedns.models import Account


@pytest.fixture
def test_accounts() -> dict[str, Account]:
    return {
        "lettuceencrypt.org": Account(
            full_domain="lettuceencrypt.org",
            sub_domain="tossed.lettuceencrypt.org",
            username="cpu",
            password="hunter2",
            server_url="https://auth.acme-dns.io",
        ),
        "threeletter.agency": Account(
            full_domain="threeletter.agency",
            sub_domain="jobs.threeletter.agency",
            username="spooky.mulder",
            password="trustno1",
            server_url="https://example.org",
        ),
    }
