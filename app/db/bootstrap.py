# app/db/bootstrap.py
import logging
import os

from alembic import command
from alembic.config import Config

from app.db.init_db import init_db
from app.db.session import SQLALCHEMY_DATABASE_URL, SessionLocal

logger = logging.getLogger(__name__)

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

def alembic_config() -> Config:
    cfg = Config(os.path.join(ROOT_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(ROOT_DIR, "migrations"))
    # "%" é interpolação no configparser
    cfg.set_main_option("sqlalchemy.url", SQLALCHEMY_DATABASE_URL.replace("%", "%%"))
    return cfg

def run_migrations_and_seed() -> None:
    command.upgrade(alembic_config(), "head")
    logger.info("migrations applied", extra={"revision": "head"})

    with SessionLocal() as db:
        init_db(db)
