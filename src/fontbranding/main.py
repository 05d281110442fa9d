import os

import uvicorn

from fontbranding.config import get_settings
from fontbranding.utils.logging import setup_logging, get_logger


def main():
    s = get_settings()
    setup_logging(level=s.LOG_LEVEL, json_output=(s.LOG_FORMAT == "json"))
    log = get_logger("fontbranding.bootstrap")
    log.info("FontBranding starting…")
    for line in s.summary_lines():
        log.info(line)
    uvicorn.run(
        "fontbranding.server:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
