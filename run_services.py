import asyncio
import logging
import os

import uvicorn

logger = logging.getLogger("run_services")

# (import path, port env var, default port)
SERVICES = [
    ("auth_service.app.main:app", "AUTH_SERVICE_PORT", 8001),
    ("directory_service.app.main:app", "DIRECTORY_SERVICE_PORT", 8002),
]


def build_server(app_path: str, port: int) -> uvicorn.Server:
    config = uvicorn.Config(
        app_path,
        host=os.getenv("SERVICE_HOST", "0.0.0.0"),
        port=port,
        reload=os.getenv("SERVICE_RELOAD", "false").lower() == "true",
    )
    return uvicorn.Server(config)


async def start_servers():
    servers = []
    for app_path, port_var, default_port in SERVICES:
        port = int(os.getenv(port_var, default_port))
        logger.info("Starting %s on port %s", app_path, port)
        servers.append(build_server(app_path, port))

    # Both services share one database and run side by side
    await asyncio.gather(*(server.serve() for server in servers))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
