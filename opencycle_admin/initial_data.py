"""Bootstrap a fresh database: `python -m opencycle_admin.initial_data`."""

from loguru import logger
from sqlmodel import Session

from opencycle_admin.database.database import create_db_and_tables, engine
from opencycle_admin.database.init_db import init_db


def main() -> None:
    logger.info("Preparing admin database")
    create_db_and_tables()
    with Session(engine) as session:
        init_db(session)
    logger.info("Admin database ready")


if __name__ == "__main__":
    main()
