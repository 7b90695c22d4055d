import os

import uvicorn

from src.conf.config import settings


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    host = os.environ.get("HOST", "0.0.0.0")

    print(f"Starting bundle stock server on {host}:{port}...")

    # log_config=None keeps the handlers installed by setup_logging() in lifespan
    uvicorn.run(
        "src.server.main:app",
        host=host,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
        log_config=None,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
