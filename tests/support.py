from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vitrine.database import init_db
from vitrine.schemas.product import Product
from vitrine.schemas.sale import Sale


def make_session(create_tables=True):
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if create_tables:
        init_db(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    return Session()


def product(product_id="p1", name="Anel", price="R$ 10,00", stock=None, in_showcase=False, image=""):
    return Product(
        id=product_id,
        name=name,
        price=price,
        stock=stock,
        in_showcase=in_showcase,
        image=image,
    )


def sale(sale_id="s1", product_id="p1", product_name="Anel", total_price=10.0, date=None):
    return Sale(
        id=sale_id,
        product_id=product_id,
        product_name=product_name,
        quantity=1,
        total_price=total_price,
        date=date or datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
