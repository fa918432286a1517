import asyncio

from jobspark.bot import main as run
from jobspark.database import start_db
from jobspark.database.db_manager import DBManager
from jobspark.utils.env import load_env
from jobspark.utils.logs import setup_logging

if __name__ == '__main__':
    load_env()
    setup_logging()

    with DBManager() as db:
        # Run full DB setup (schema + migrations)
        start_db.run(db)

    # Start the bot
    asyncio.run(run())
