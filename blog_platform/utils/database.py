from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from blog_platform.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    future=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
