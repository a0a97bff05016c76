from sqlalchemy.orm import Session, sessionmaker

from vitrine.database.engine import engine

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db():
    """Request-scoped session; anything left uncommitted by a failed request is rolled back."""
    db: Session = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
