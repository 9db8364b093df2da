"""Database configuration for the SQL key-value backend."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# Create SQLAlchemy base
Base = declarative_base()


def create_store_engine(database_uri: str, echo: bool = False):
    """Create an engine suited to the configured database URL."""
    options = {'echo': echo, 'pool_pre_ping': True}

    if database_uri.startswith('sqlite'):
        # Flask serves requests from several threads
        options['connect_args'] = {'check_same_thread': False}
        if database_uri in ('sqlite://', 'sqlite:///:memory:'):
            # A single shared connection, otherwise every checkout gets an empty database
            options['poolclass'] = StaticPool
    else:
        options['pool_size'] = 10
        options['max_overflow'] = 20

    return create_engine(database_uri, **options)


def init_db(engine):
    """Create tables and return a session factory bound to the engine."""
    # Register models on Base.metadata
    from bakery.models.kv_entry import KVEntry  # noqa: F401

    Base.metadata.create_all(engine)
    return sessionmaker(autoflush=False, bind=engine)
