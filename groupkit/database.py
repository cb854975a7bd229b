from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from groupkit.config import settings


def engine_options(database_url: str) -> dict:
    """
    Keyword arguments for create_engine, by backend.

    SQLite (local runs and tests) uses a single-file or in-memory database
    shared across threads, so it gets no pool sizing. Server backends get
    the configured pool and pre-ping.
    """
    options = {"echo": settings.DEBUG}  # Log SQL queries in debug mode
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        return options

    options.update(
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )
    return options


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """
    FastAPI dependency for database sessions.

    Yields a database session and ensures it's closed after use.

    Usage:
        @app.get("/groups/{group_id}/account")
        def read_account(group_id: int, db: Session = Depends(get_db)):
            return db.query(GroupAccount).filter_by(group_id=group_id).first()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
