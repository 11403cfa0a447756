"""Seed a development database with the admin account and reference data."""
import os

from cirec_admin.auth import get_password_hash
from cirec_admin.database import Base, get_engine, new_session
from cirec_admin.models import Admin, Country, Page, RegistrationOption, RegistrationPrice

COUNTRIES = (
    "Austria", "Belarus", "Bulgaria", "Croatia", "Czech Republic", "Estonia",
    "Germany", "Hungary", "Kazakhstan", "Latvia", "Lithuania", "Poland",
    "Romania", "Russia", "Serbia", "Slovakia", "Slovenia", "Ukraine",
    "United Kingdom", "Uzbekistan",
)

PAGES = ("Home", "About Us", "Services", "Subscription", "Contact")

REGISTRATION_OPTIONS = {
    "Monthly News": (("1 year", 950.0), ("2 years", 1750.0)),
    "Statistical Database": (("1 year", 2500.0), ("2 years", 4500.0)),
    "Search Engine": (("3 months", 150.0), ("6 months", 280.0), ("12 months", 500.0)),
}


def seed():
    """Seed database with an admin and starter reference tables."""
    Base.metadata.create_all(bind=get_engine())
    db = new_session()

    try:
        login = os.getenv("SEED_ADMIN_LOGIN", "admin")
        password = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
        if db.query(Admin).filter(Admin.login == login).first() is None:
            db.add(Admin(login=login, password_hash=get_password_hash(password)))

        if db.query(Country).count() == 0:
            db.add_all(Country(id=index, name=name) for index, name in enumerate(COUNTRIES, start=1))

        if db.query(Page).count() == 0:
            db.add_all(Page(id=index, name=name) for index, name in enumerate(PAGES, start=1))

        if db.query(RegistrationOption).count() == 0:
            price_id = 1
            for option_id, (option_name, prices) in enumerate(REGISTRATION_OPTIONS.items(), start=1):
                db.add(RegistrationOption(id=option_id, name=option_name))
                for price_name, amount in prices:
                    db.add(RegistrationPrice(id=price_id, name=price_name, price=amount, option_id=option_id))
                    price_id += 1

        db.commit()
        print("✅ Database seeded successfully!")
        print(f"\nAdmin login: {login}/{password}")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
