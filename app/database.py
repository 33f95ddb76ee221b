import os
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    raise RuntimeError(
        "DATABASE_URL environment variable is not set.\n"
        "Make sure it exists in your .env locally or in the deployment environment."
    )

from app.core.config import settings

if DATABASE_URL.startswith("sqlite"):
    engine_options = {"connect_args": {"check_same_thread": False}}
else:
    engine_options = {
        "pool_pre_ping": True,   # Test connections before using
        "pool_size": 10,         # Base connection pool size
        "max_overflow": 20,      # Max connections beyond pool_size
        "pool_timeout": 30,      # Timeout for getting connection (seconds)
        "pool_recycle": 3600,    # Recycle connections after 1 hour
        "connect_args": {"connect_timeout": settings.DB_CONNECT_TIMEOUT},
    }

engine = create_engine(
    DATABASE_URL,
    echo=False,              # Set to True for debugging SQL logs
    future=True,
    **engine_options,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)

# Import and use logger
from app.core.logging_config import logger


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> bool:
    """
    Create any missing tables and seed the default admin.

    The admin is only inserted when the user table did not exist before this
    call, so restarting against an existing database leaves users untouched.

    Returns:
        True if the schema was created from scratch
    """
    bind = bind or engine

    # Models must be registered on Base.metadata before create_all
    import app.models  # noqa: F401
    from app.models.user import User

    fresh = not inspect(bind).has_table(User.__tablename__)
    Base.metadata.create_all(bind=bind, checkfirst=True)

    if fresh:
        from app.services.user import user_service
        from app.schemas.user import UserCreate, RoleAssignment
        from app.models.user import Role

        db = sessionmaker(bind=bind, autocommit=False, autoflush=False, future=True)()
        try:
            user_service.add_user(
                db,
                UserCreate(
                    name=settings.ADMIN_NAME,
                    email=settings.ADMIN_EMAIL,
                    password=settings.ADMIN_PASSWORD,
                    roles=[RoleAssignment(role=Role.admin)],
                ),
            )
            logger.info(f"Database created, seeded admin {settings.ADMIN_EMAIL}")
        finally:
            db.close()

    return fresh
