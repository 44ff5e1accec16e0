import os
import sys
import json
import logging
import asyncio
from dotenv import load_dotenv

from collector.config import CollectorConfig
from collector.db import Database
from collector.errors import ConfigError
from collector.models import RunSummary
from collector.pipeline import run_collection


# Load env
load_dotenv()

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def main() -> RunSummary:
    logger.info("Starting 나는솔로 news collector...")

    try:
        config = CollectorConfig.from_env()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return RunSummary.failed(str(e))

    db = Database(config.db_path, enabled=config.enable_database)
    summary = await run_collection(config=config, database=db)

    if summary.ok:
        logger.info(f"Inserted {summary.inserted}/{summary.total} (skipped {summary.skipped})")
        for failure in summary.errors:
            logger.warning(f"  {failure.source_id}: {failure.message}")

        recent = db.recent_articles(limit=5)
        if recent:
            logger.info(f"Latest {len(recent)} of {db.count()} stored articles:")
            for row in recent:
                logger.info(f"  📰 {row['title'][:60]} [{row['author']}]")

    return summary


if __name__ == "__main__":
    result = asyncio.run(main())
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    sys.exit(0 if result.ok else 1)
