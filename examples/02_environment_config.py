"""
Environment Configuration Example

Loads client settings from CONSTELLIX_* variables or a .env file:

    CONSTELLIX_API_KEY=...
    CONSTELLIX_SECRET_KEY=...
    CONSTELLIX_PROXY_URL=http://proxy.local:3128
    CONSTELLIX_REQUEST_INTERVAL=0.5
    CONSTELLIX_LOG_LEVEL=INFO
    CONSTELLIX_LOG_FORMAT=json
"""

from constellix_client import ConstellixClient
from constellix_client.core.env_config import load_from_env, print_config_summary


def main():
    config = load_from_env(env_file=".env")
    print_config_summary(config)

    with ConstellixClient(config=config) as client:
        response = client.fetch_by_id("v1/domains")
        print(f"Domains: {len(response.json())}")


if __name__ == "__main__":
    main()
