from decimal import Decimal
from sqlmodel import Session, select
from musicstore.db.session import engine, create_db_and_tables
from musicstore.models.product import Product

def seed_products():
    print("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        # Check if products already exist to avoid duplicates
        existing_products = session.exec(select(Product)).all()
        if existing_products:
            print(f"Database already contains {len(existing_products)} products. Skipping seed.")
            return

        print("Seeding initial albums...")
        products = [
            Product(name="The Best Of Men At Work", price=Decimal("8.99")),
            Product(name="A Copland Celebration, Vol. I", price=Decimal("8.99")),
            Product(name="Worlds", price=Decimal("8.99")),
            Product(name="For Those About To Rock We Salute You", price=Decimal("8.99")),
            Product(name="Let There Be Rock", price=Decimal("9.99")),
        ]

        for product in products:
            session.add(product)

        session.commit()
        print(f"Successfully seeded {len(products)} albums!")

if __name__ == "__main__":
    seed_products()
