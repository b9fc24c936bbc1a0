"""
MovieNotes Backend: Process Entry Point
========================================

What:  Starts uvicorn serving movienotes.main:app.
How:   Host, port and log level come from settings (defaults 0.0.0.0:3000).
Who:   `python -m movienotes` or the `movienotes` console script.
"""

import uvicorn

from movienotes.config import settings


def main() -> None:
    uvicorn.run(
        "movienotes.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
