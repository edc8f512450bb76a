"""
Usage Examples for jsonrest
Demonstrates configuring a client and calling a JSON API
"""

from pydantic import BaseModel

from jsonrest import (
    ClientConfig,
    ConfigLoader,
    RemoteError,
    RequestClient,
    TransportError,
)


class Post(BaseModel):
    userId: int
    id: int = 0
    title: str
    body: str = ""


# =============================================================================
# Example 1: Keyword Configuration
# =============================================================================

def keyword_config_example() -> RequestClient:
    """Create a client with debug diagnostics on stderr"""
    return RequestClient.create(
        "https://jsonplaceholder.typicode.com",
        debug=True,
        read_timeout=5000,
    )


# =============================================================================
# Example 2: Loaded Configuration
# =============================================================================

def loaded_config_example() -> RequestClient:
    """Merge a JSON file, JSONREST_* environment variables and code"""
    loader = ConfigLoader()
    config: ClientConfig = loader.load(
        config={"base_address": "https://jsonplaceholder.typicode.com"},
    )
    return RequestClient(config)


# =============================================================================
# Example 3: Calls and Errors
# =============================================================================

def calls_example(client: RequestClient) -> None:
    """Fetch, update and handle failures"""
    base = client.base_address

    post = client.get(f"{base}/posts/1", Post)
    print(f"Fetched: {post.title}")

    # only 200 counts as success, so update rather than create (201)
    updated = client.put(f"{base}/posts/1", Post(userId=1, id=1, title="hello"), Post)
    print(f"Updated: {updated.title}")

    try:
        client.get(f"{base}/does-not-exist", dict)
    except RemoteError as e:
        print(f"Remote error {e.status_code}: {e.to_json()}")
    except TransportError as e:
        print(f"Transport error: {e}")


if __name__ == "__main__":
    with keyword_config_example() as client:
        client.set_bearer_token("example-token")
        calls_example(client)
