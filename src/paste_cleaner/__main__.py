# -*- coding: utf-8 -*-
"""
Run the paste cleaning API: ``python -m paste_cleaner`` or ``paste-cleaner``.
"""
import uvicorn

from paste_cleaner.config import settings


def main():
    """Serve the cleaning endpoints with the configured host, port and log level."""
    uvicorn.run(
        "paste_cleaner.api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
