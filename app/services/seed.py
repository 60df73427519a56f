"""Create tables and seed an empty database with the bootstrap admin, a starter form and the default catalog."""

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models import Base, FormStructureVersion, Service, User

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

_EMAIL_FIELD_PATTERN = r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,4}$"

INITIAL_FORM_STRUCTURE: list[dict[str, Any]] = [
    {
        "id": 1,
        "title": "Account Manager Information",
        "fields": [
            {"id": "manager_name", "type": "text", "label": "Name", "required": True,
             "minLength": 2, "maxLength": 100},
            {"id": "manager_contact", "type": "text", "label": "Contact Number", "required": True,
             "minLength": 10, "maxLength": 20},
            {"id": "manager_email", "type": "email", "label": "Email", "required": True,
             "pattern": _EMAIL_FIELD_PATTERN, "maxLength": 255},
        ],
    },
    {
        "id": 2,
        "title": "Client Information",
        "fields": [
            {"id": "company_name", "type": "text", "label": "Company name", "required": True,
             "minLength": 2, "maxLength": 100},
            {"id": "client_name", "type": "text", "label": "Client name", "required": True,
             "minLength": 2, "maxLength": 100},
            {"id": "client_email", "type": "email", "label": "Client email", "required": True,
             "pattern": _EMAIL_FIELD_PATTERN, "maxLength": 255},
            {"id": "company_number", "type": "text", "label": "Company number", "required": True,
             "minLength": 5, "maxLength": 20},
        ],
    },
    {
        "id": 3,
        "title": "Add on Services",
        "fields": [
            {"id": "premium_service", "type": "checkbox",
             "label": "Premium Services/Quick Delivery (within 2 weeks)", "required": False},
            {"id": "evening_test", "type": "checkbox", "label": "Evening Test (After 6pm)",
             "required": False},
            {"id": "weekend_holiday", "type": "checkbox", "label": "Weekend/Holiday",
             "required": False},
            {"id": "onsite_delivery", "type": "checkbox", "label": "On-Site Delivery",
             "required": False},
        ],
    },
]

# (name, slug) in display order
DEFAULT_SERVICES: list[tuple[str, str]] = [
    ("ISO 27001 Certification", "iso27001certification"),
    ("Mobile Application Testing", "mobileapplicationtesting"),
    ("Phishing Simulation", "phishingsimulation"),
    ("Red Team Assessment", "redteamassessment"),
    ("Secure Code Review", "securecodereview"),
    ("Silver Subscription", "silversubscription"),
    ("Vulnerability Assessment", "vulnerabilityassessment"),
    ("API Penetration Testing", "apipenetrationtesting"),
    ("Bronze Subscription", "bronzesubscription"),
    ("Cloud Assessment", "cloudassessment"),
    ("Cyber Awareness", "cyberawareness"),
    ("Cyber Essential", "cyberessential"),
    ("Cyber Essentials Plus", "cyberessentialsplus"),
    ("Gold Subscription", "goldsubscription"),
    ("Infrastructure Testing", "infrastructuretesting"),
    ("Test & Authorization order form", "testauthorization"),
    ("Web Application Penetration Testing", "wapt"),
]


def seed_defaults(session: Session, settings: "Settings") -> dict[str, int]:
    """
    Insert the bootstrap rows into empty tables. Idempotent: tables that
    already hold rows are left alone. Returns counts of inserted rows.
    """
    inserted = {"users": 0, "form_structure": 0, "services": 0}

    if session.query(User.id).first() is None:
        session.add(
            User(
                username=settings.BOOTSTRAP_ADMIN_USERNAME,
                email=settings.BOOTSTRAP_ADMIN_EMAIL,
                password_hash=hash_password(settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value()),
                is_admin=True,
            )
        )
        inserted["users"] = 1

    if session.query(FormStructureVersion.id).first() is None:
        session.add(FormStructureVersion(structure=INITIAL_FORM_STRUCTURE))
        inserted["form_structure"] = 1

    if session.query(Service.id).first() is None:
        session.add_all(
            Service(name=name, title=slug, display_order=order)
            for order, (name, slug) in enumerate(DEFAULT_SERVICES, start=1)
        )
        inserted["services"] = len(DEFAULT_SERVICES)

    session.commit()
    if any(inserted.values()):
        logger.info(
            "Seeded defaults: users=%s form_structure=%s services=%s",
            inserted["users"],
            inserted["form_structure"],
            inserted["services"],
        )
    return inserted


def init_db(engine: Engine, session: Session, settings: "Settings") -> dict[str, int]:
    """Create any missing tables, then seed defaults."""
    Base.metadata.create_all(bind=engine)
    return seed_defaults(session, settings)
