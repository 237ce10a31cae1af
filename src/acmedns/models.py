"""Data classes shared by the client and the storage backends."""

from __future__ import annotations

from dataclasses import dataclass, field

_REQUIRED_FIELDS = ("fulldomain", "subdomain", "username", "password")


@dataclass(frozen=True)
class Account:
    """Credentials for one delegated subdomain, as issued by an ACME DNS server.

    ``server_url`` is empty for records persisted before the field existed.
    """

    full_domain: str
    sub_domain: str
    username: str
    password: str = field(repr=False)
    server_url: str = ""

    def to_dict(self) -> dict:
        return {
            "fulldomain": self.full_domain,
            "subdomain": self.sub_domain,
            "username": self.username,
            "password": self.password,
            "server_url": self.server_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Account:
        """Build an Account from its JSON shape.

        Raises:
            ValueError: if ``data`` is not a mapping, a required key is missing,
                or a value is not a string.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Account data must be an object, got {type(data).__name__}")
        missing = [key for key in _REQUIRED_FIELDS if key not in data]
        if missing:
            raise ValueError(f"Account data is missing {', '.join(missing)}")

        values = {key: data[key] for key in _REQUIRED_FIELDS}
        values["server_url"] = data.get("server_url") or ""
        for key, value in values.items():
            if not isinstance(value, str):
                raise ValueError(f"Account field '{key}' must be a string, got {type(value).__name__}")

        return cls(
            full_domain=values["fulldomain"],
            sub_domain=values["subdomain"],
            username=values["username"],
            password=values["password"],
            server_url=values["server_url"],
        )
