from urllib.parse import parse_qs, urlparse

from httpx import AsyncClient


async def register(client: AsyncClient, email="a@x.com", password="secret1", name=None):
    body = {"email": email, "password": password}
    if name is not None:
        body["name"] = name
    response = await client.post("/auth/register", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def token_from_link(link: str) -> str:
    return parse_qs(urlparse(link).query)["token"][0]


async def request_reset(client: AsyncClient, notifier, email="a@x.com") -> str:
    """Run forgot-password and return the raw secret the notifier received"""
    response = await client.post("/auth/forgot-password", json={"email": email})
    assert response.status_code == 200
    _, link = notifier.reset_links[-1]
    return token_from_link(link)
