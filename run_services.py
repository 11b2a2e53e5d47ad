import asyncio
import logging
import os

import uvicorn

logger = logging.getLogger("run_services")

SERVICES = [
    ("auth_service.app.main:app", int(os.getenv("AUTH_SERVICE_PORT", 8001))),
    ("inventory_service.app.main:app", int(os.getenv("INVENTORY_SERVICE_PORT", 8002))),
]


async def start_servers():
    host = os.getenv("SERVICE_HOST", "0.0.0.0")
    reload = os.getenv("SERVICE_RELOAD", "false").lower() == "true"

    servers = []
    for app_path, port in SERVICES:
        logger.info("Starting %s on %s:%s", app_path, host, port)
        servers.append(uvicorn.Server(
            uvicorn.Config(app_path, host=host, port=port, reload=reload)))

    # Run both servers concurrently
    await asyncio.gather(*(server.serve() for server in servers))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s [%(levelname)s]: %(message)s")
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
