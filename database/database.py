from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import get_config

engine = create_engine(
    get_config().database.url,
    pool_pre_ping=True,  # Verify connections before using
    pool_size=10,
    max_overflow=20
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
