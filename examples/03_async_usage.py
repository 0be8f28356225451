"""
Async Client Example

Requires: pip install constellix-client-core[async]
"""

import asyncio
import os

from constellix_client import AsyncConstellixClient


async def main():
    async with AsyncConstellixClient(
        api_key=os.environ["CONSTELLIX_API_KEY"],
        secret_key=os.environ["CONSTELLIX_SECRET_KEY"],
        request_interval=0.5,
    ) as client:
        # Calls run concurrently but the rate gate keeps them 0.5s apart
        responses = await asyncio.gather(
            client.fetch_by_id("v1/domains"),
            client.fetch_by_id("v1/pools/A"),
            client.fetch_by_id("https://api.sonar.constellix.com/rest/api/http"),
        )
        for response in responses:
            print(response.request.url, response.status_code)


if __name__ == "__main__":
    asyncio.run(main())
