"""
Basic Constellix Client Usage Examples

Demonstrates create / fetch / update / delete against the DNS API
and error handling for both API families.

Credentials come from CONSTELLIX_API_KEY / CONSTELLIX_SECRET_KEY.
"""

from constellix_client import (
    APIError,
    CallContext,
    ConstellixClient,
    RequestCancelledError,
    TransportError,
)


def domain_lifecycle(client: ConstellixClient):
    """Create, read, update and delete a domain."""
    print("\n=== Domain lifecycle ===")

    response = client.create({"names": ["example-test.com"]}, "v1/domains")
    domain_id = response.json()[0]["id"]
    print(f"Created domain {domain_id}")

    domain = client.fetch_by_id(f"v1/domains/{domain_id}").json()
    print(f"Fetched: {domain['name']}")

    client.update_by_id({"soa": {"ttl": 3600}}, f"v1/domains/{domain_id}")
    print("Updated SOA ttl")

    client.delete_by_id(f"v1/domains/{domain_id}")
    print("Deleted")


def handle_errors(client: ConstellixClient):
    """APIError carries the normalized message and the raw response."""
    print("\n=== Error handling ===")

    try:
        client.fetch_by_id("v1/domains/0")
    except APIError as e:
        print(f"{e.target} API error {e.status_code}: {e}")
    except TransportError as e:
        print(f"Network problem (retryable={e.retryable}): {e}")


def checks_api(client: ConstellixClient):
    """Absolute checks API URLs are used as-is."""
    print("\n=== Checks API ===")

    try:
        response = client.fetch_by_id("https://api.sonar.constellix.com/rest/api/http")
        print(f"HTTP checks: {len(response.json())}")
    except APIError as e:
        print(f"Checks API said: {e}")


def with_deadline(client: ConstellixClient):
    """Give up if the rate gate would keep us waiting too long."""
    print("\n=== Deadline ===")

    try:
        client.fetch_by_id("v1/domains", ctx=CallContext.with_timeout(0.1))
        client.fetch_by_id("v1/domains", ctx=CallContext.with_timeout(0.1))
    except RequestCancelledError as e:
        print(f"Skipped ({e.reason}): {e}")


if __name__ == "__main__":
    with ConstellixClient.from_env(request_interval=0.5) as client:
        domain_lifecycle(client)
        handle_errors(client)
        checks_api(client)
        with_deadline(client)
