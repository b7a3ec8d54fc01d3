from sqlalchemy import create_engine               # engine factory
from sqlalchemy.orm import declarative_base        # base class for models
from sqlalchemy.orm import sessionmaker            # session factory

from config.settings import settings               # environment settings

# SQLite connections are shared with the request threadpool
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# build the engine from the configured DB URL
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

# session factory used by request dependencies and scripts
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# declarative base shared by every model
Base = declarative_base()
