from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine, Session
import logging
from .config import settings

logger = logging.getLogger(__name__)

# The live-slot index is partial (sqlite_where / postgresql_where); other
# dialects would build it as a plain unique index and block rebooking
SUPPORTED_BACKENDS = ("sqlite", "postgresql")


def ensure_supported_backend(url) -> str:
    backend = make_url(url).get_backend_name()
    if backend not in SUPPORTED_BACKENDS:
        raise RuntimeError(
            f"Unsupported database backend '{backend}'. Use one of: {', '.join(SUPPORTED_BACKENDS)}"
        )
    return backend


# Choose engine options based on database scheme
db_url = settings.DATABASE_URL
engine_kwargs = {}

if ensure_supported_backend(db_url) == "sqlite":
    # SQLite specific connect args
    engine_kwargs.update({
        "connect_args": {"check_same_thread": False, "timeout": 15}
    })
else:
    # Better resiliency for managed Postgres
    engine_kwargs.update({
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": 5,
        "max_overflow": 10,
    })

engine = create_engine(db_url, echo=settings.DEBUG, **engine_kwargs)

def create_db_and_tables(bind=None):
    # Import models so their tables are registered on the metadata
    from .db import models  # noqa: F401
    target = bind or engine
    ensure_supported_backend(target.url)
    SQLModel.metadata.create_all(target)
    logger.info("Database tables ensured")

def get_session():
    with Session(engine) as session:
        yield session
