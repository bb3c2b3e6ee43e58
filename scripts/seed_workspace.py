"""Create the tables and seed the reference workspace into the configured DB."""

import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from opportunity_api.core.db import AsyncSessionLocal, init_db
from opportunity_api.core.logging_config import setup_logging
from opportunity_api.core.settings import settings
from opportunity_api.seed import seed_if_empty

async def main():
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    await init_db()
    async with AsyncSessionLocal() as s:
        seeded = await seed_if_empty(s)
    print("Seeded reference workspace" if seeded else "Workspace already present, nothing to do")

if __name__ == "__main__":
    asyncio.run(main())
