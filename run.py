# ================================
# FILE: run.py
# ================================
"""
Main entry point for the Upload Store service.

Starts uvicorn with host, port, workers and reload taken from the
environment, falling back to upload_store.core.config settings.
"""
import os
import sys
import logging
import traceback
import multiprocessing
from pathlib import Path
import uvicorn

# Put project root on sys.path so "import upload_store" works when running run.py directly.
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

logger = logging.getLogger("upload_store.run")
logger.setLevel(logging.INFO)

if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s", "%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(ch)


def _determine_workers(debug: bool) -> int:
    """Keep 1 in debug to allow reload; otherwise leave one CPU free, capped at 4."""
    if debug:
        return 1
    try:
        cpus = multiprocessing.cpu_count()
    except NotImplementedError:
        return 1
    return max(1, min(4, cpus - 1))


def main() -> None:
    try:
        from upload_store.core.config import settings
    except Exception as exc:
        logger.error("Failed to load settings: %s", exc)
        logger.error("Traceback:\n%s", traceback.format_exc())
        sys.exit(1)

    host = os.getenv("HOST", settings.host)
    port = int(os.getenv("PORT", str(settings.port)))
    debug = bool(settings.debug)

    workers_env = os.getenv("WORKERS")
    workers = int(workers_env) if workers_env else _determine_workers(debug)

    reload_flag = os.getenv("RELOAD", "true" if debug else "false").lower() in ("1", "true", "yes")
    log_level = os.getenv("LOG_LEVEL", settings.log_level).lower()

    logger.info(
        "Starting uvicorn server on %s:%d (reload=%s, workers=%d, log_level=%s)",
        host,
        port,
        reload_flag,
        workers,
        log_level,
    )

    try:
        uvicorn.run(
            "upload_store.main:app",
            host=host,
            port=port,
            reload=reload_flag,
            workers=workers,
            log_level=log_level,
        )
    except KeyboardInterrupt:
        logger.info("Shutdown requested (KeyboardInterrupt). Exiting gracefully.")
        raise
    except Exception as exc:
        logger.exception("Unexpected exception while running uvicorn: %s", exc)
        sys.exit(2)


if __name__ == "__main__":
    main()
