# scripts/dev_db_init.py
# Usage:
#   python -m scripts.dev_db_init
from app import create_app
from extensions import db
from seed import seed_slots, seed_users

def init_dev_db(app, days: int = 3):
    db.create_all()
    seed_users(app)
    seed_slots(app, days)
    db.session.commit()

if __name__ == "__main__":
    app = create_app("dev")
    with app.app_context():
        init_dev_db(app)
        print("DB initialized and seeded")
