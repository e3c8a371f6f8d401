"""
SQLAlchemy database models and configuration.

Architecture Decision: Why SQLAlchemy?
- Provides ORM for cleaner code and prevents SQL injection
- Easy to migrate to another database if needed

All persisted state is a flat key/value table: the reminder only ever needs
get/set of whole values (last task, audio descriptor, journal list).
Writes are small and happen inside Qt event handlers, so a synchronous engine
is used instead of an async one.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import create_engine, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker


# Base class for all models
class Base(DeclarativeBase):
    pass


class PreferenceModel(Base):
    """SQLAlchemy model for a single persisted key/value pair"""
    __tablename__ = "preferences"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )


class DatabaseEngine:
    """
    Manages database connection and session lifecycle.

    Singleton pattern ensures only one engine exists per application.
    """
    _instance: Optional['DatabaseEngine'] = None

    def __init__(self, db_url: str, **engine_kwargs):
        self.engine = create_engine(db_url, echo=False, **engine_kwargs)
        self.session_factory = sessionmaker(self.engine, expire_on_commit=False)

    @classmethod
    def get_instance(cls, db_url: Optional[str] = None) -> 'DatabaseEngine':
        """Get or create the database engine instance"""
        if cls._instance is None:
            if db_url is None:
                from .config import get_settings
                db_url = get_settings().get_db_url()
            cls._instance = cls(db_url)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Dispose and forget the shared engine"""
        if cls._instance is not None:
            cls._instance.dispose()
            cls._instance = None

    def create_tables(self):
        """Create all tables in the database"""
        Base.metadata.create_all(self.engine)

    def drop_tables(self):
        Base.metadata.drop_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session"""
        return self.session_factory()

    def dispose(self):
        self.engine.dispose()


# Convenience functions
def get_engine(db_url: Optional[str] = None) -> DatabaseEngine:
    """Get the database engine instance"""
    return DatabaseEngine.get_instance(db_url)


def init_db(db_url: Optional[str] = None) -> DatabaseEngine:
    """Initialize the database (create tables)"""
    engine = get_engine(db_url)
    engine.create_tables()
    return engine
