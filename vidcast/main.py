# File: vidcast/main.py

import os
import signal
import logging
import threading

from vidcast.core.config.settings import settings
from vidcast.core.database.connection import init_db
from vidcast.core.tasks import tasks
from vidcast.features.ingest.service.worker import IngestWorker

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    settings.ensure_dirs()
    init_db()

    worker = IngestWorker()
    stop = threading.Event()

    def _shutdown(signum, _frame):
        logger.info(f"Received signal {signum}, shutting down...")
        stop.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    worker.start()
    logger.info(f"🚀 vidcast worker running. Scratch dir: {settings.UPLOADS_DIR}")
    while not stop.wait(1.0):
        pass

    worker.stop(timeout=30)
    tasks.shutdown(wait=True)


if __name__ == "__main__":
    main()
