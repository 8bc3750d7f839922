"""
Idempotent seed script.
Usage:
  python seed.py --reset         # drop and recreate the database, then seed demo data
  python seed.py --ensure-admin  # only create the default admin/staff users
  python seed.py --days 14       # soft-fill missing slots for the next 14 days (idempotent)
"""
from datetime import date, timedelta
import argparse

from app import create_app
from extensions import db
from models import Role, TimeSlot, User

def get_or_create(model, defaults=None, **by):
    """Idempotent create keyed by the given columns."""
    inst = db.session.query(model).filter_by(**by).first()
    if inst:
        return inst, False
    data = dict(by)
    if defaults:
        data.update(defaults)
    inst = model(**data)
    db.session.add(inst)
    db.session.flush()
    return inst, True

def seed_users(app) -> int:
    created = 0
    users = app.config.get("DEFAULT_USERS") or [
        {"phone_number": "9000000001", "role": Role.ADMIN.value},
        {"phone_number": "9000000002", "role": Role.STAFF.value},
    ]
    for u in users:
        _, new = get_or_create(User, defaults={"role": u["role"]}, phone_number=u["phone_number"])
        created += int(new)
    return created

def seed_slots(app, days: int, start: date | None = None) -> int:
    """Slots for every default time range over the next `days` days."""
    start = start or date.today()
    capacity = int(app.config.get("SLOT_DEFAULT_CAPACITY", 10))
    created = 0
    for offset in range(days):
        d = start + timedelta(days=offset)
        for tr in app.config.get("DEFAULT_TIME_RANGES", []):
            _, new = get_or_create(TimeSlot, defaults={"max_capacity": capacity, "current_bookings": 0,
                                                       "is_active": True},
                                   date=d, time_range=tr)
            created += int(new)
    return created

def main():
    parser = argparse.ArgumentParser(description="Seed the Laundrify database")
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    parser.add_argument("--ensure-admin", action="store_true", help="only create the default users")
    parser.add_argument("--days", type=int, default=7, help="how many days of slots to create")
    parser.add_argument("--config", default=None, help="config name (dev/prod)")
    args = parser.parse_args()

    app = create_app(args.config)
    with app.app_context():
        if args.reset:
            db.drop_all()
        db.create_all()
        users = seed_users(app)
        slots = 0 if args.ensure_admin else seed_slots(app, args.days)
        db.session.commit()
        print(f"Seed done: users +{users}, slots +{slots}")

if __name__ == "__main__":
    main()
