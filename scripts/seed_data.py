import argparse
import logging

from sqlalchemy import delete, select

from vitrine.core.logging import setup_logging
from vitrine.database import SessionLocal, init_db
from vitrine.models.product import ProductDocument
from vitrine.models.sale import SaleDocument
from vitrine.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {"name": "Anel Solitário", "price": "R$ 89,90", "stock": 4, "in_showcase": True},
    {"name": "Brinco Argola Cravejada", "price": "R$ 64,90", "stock": 2, "in_showcase": True},
    {"name": "Colar Ponto de Luz", "price": "R$ 119,90", "stock": 6, "in_showcase": True},
    {"name": "Pulseira Riviera", "price": "R$ 1.249,00", "stock": 1, "in_showcase": False},
    {"name": "Tornozeleira Bolinhas", "price": "R$ 49,90", "stock": 0, "in_showcase": False},
]


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample jewelry products.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing products and sales before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    init_db()

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(SaleDocument))
            db.execute(delete(ProductDocument))
            db.commit()

        has_product = db.execute(select(ProductDocument.id).limit(1)).first()
        if has_product:
            print("Seed skipped: products already exist.")
            return

        repository = ProductRepository(db)
        for fields in SAMPLE_PRODUCTS:
            product_id = repository.create(fields)
            logger.info("Seeded %s (%s)", fields["name"], product_id)

        print("Seeded {} products.".format(len(SAMPLE_PRODUCTS)))
    finally:
        db.close()


if __name__ == "__main__":
    main()
