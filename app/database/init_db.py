"""Create the schema and optionally seed a demo user and customers.

Run as a script to prepare a local database:

    python -m app.database.init_db --seed
"""

import argparse
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

import app.database.db as db_module
from app.core.config import get_config
from app.core.logging_config import configure_logging
from app.database.models import Base, Customer
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

DEMO_USER = {"name": "User", "email": "user@nextmail.com", "password": "123456"}
DEMO_CUSTOMERS = (
    ("Evil Rabbit", "evil@rabbit.com", "/customers/evil-rabbit.png"),
    ("Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("Michael Novotny", "michael@novotny.com", "/customers/michael-novotny.png"),
    ("Amy Burns", "amy@burns.com", "/customers/amy-burns.png"),
    ("Balazs Orban", "balazs@orban.com", "/customers/balazs-orban.png"),
)


def init_db() -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=db_module.get_engine())
    logger.info("database.schema_ready", extra={"event": "database.schema_ready"})


def seed_demo_data(session: Session) -> None:
    """Insert the demo login and customers; rows that already exist are left alone."""
    users = UserService(db=session)
    if users.get_by_email(DEMO_USER["email"]) is None:
        users.create_user(
            name=DEMO_USER["name"],
            email=DEMO_USER["email"],
            password=DEMO_USER["password"],
            pepper=get_config().PASSWORD_PEPPER,
        )

    existing = set(session.scalars(select(Customer.email)))
    for name, email, image_url in DEMO_CUSTOMERS:
        if email not in existing:
            session.add(Customer(name=name, email=email, image_url=image_url))
    users.commit()
    logger.info("database.seeded", extra={"event": "database.seeded"})


def main() -> None:
    parser = argparse.ArgumentParser(description="Create invoice dashboard tables.")
    parser.add_argument("--seed", action="store_true", help="insert the demo user and customers")
    args = parser.parse_args()

    configure_logging()
    init_db()
    if args.seed:
        with db_module.get_db_session() as session:
            seed_demo_data(session)


if __name__ == "__main__":
    main()
