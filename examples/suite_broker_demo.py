"""Example: fetch a corp token for an authorized organization."""

from __future__ import annotations

import asyncio
import logging
import os

from suite_broker import BrokerConfig, TokenBroker, create_ticket_store_from_env


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = BrokerConfig.from_env()
    store = create_ticket_store_from_env(config.suite_key, ticket_expires_in=config.ticket_expires_in)

    # Normally the ISV callback saves each pushed ticket.
    pushed = os.getenv("SUITE_TICKET")
    if pushed:
        await store.save_ticket(pushed)

    try:
        async with TokenBroker(config, store) as broker:
            corp_token = await broker.get_corp_token(
                os.environ["AUTH_CORPID"],
                os.environ["PERMANENT_CODE"],
            )
            print("Corp token expires in", corp_token.expires_in, "seconds")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
