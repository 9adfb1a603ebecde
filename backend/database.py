import logging
from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core import config


logger = logging.getLogger(__name__)

engine = create_engine(
    config.DATABASE_URL,
    echo=config.SQL_ECHO,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_user_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def describe_database() -> str:
    return make_url(config.DATABASE_URL).render_as_string(hide_password=True)


def ensure_user_schema() -> None:
    """Bring a pre-existing ``users`` table up to the current column set."""
    global _user_schema_checked

    if _user_schema_checked:
        return

    with _schema_lock:
        if _user_schema_checked:
            return

        inspector = inspect(engine)

        if 'users' not in inspector.get_table_names():
            _user_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('users')}
        migration_steps = [
            ('name', 'ALTER TABLE users ADD COLUMN name VARCHAR(255)'),
            ('role', 'ALTER TABLE users ADD COLUMN role VARCHAR(100)'),
            ('photo', 'ALTER TABLE users ADD COLUMN photo VARCHAR(512)'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    logger.info('Adding missing users.%s column', column_name)
                    connection.execute(text(statement))

        _user_schema_checked = True


def dispose_engine() -> None:
    engine.dispose()
    logger.info('Closed database connection pool for %s', describe_database())
