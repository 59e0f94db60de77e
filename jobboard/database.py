from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from jobboard.core import config


Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def build_engine(database_url: str, **kwargs) -> Engine:
    if database_url.startswith('sqlite'):
        kwargs.setdefault('connect_args', {'check_same_thread': False})

    built = create_engine(database_url, **kwargs)

    # Profile/user role pairing relies on composite foreign keys.
    if built.dialect.name == 'sqlite':
        event.listen(built, 'connect', _enable_sqlite_foreign_keys)

    return built


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=bind,
    )


engine = build_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)

SessionLocal = build_session_factory(engine)
