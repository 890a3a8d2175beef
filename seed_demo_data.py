#!/usr/bin/env python3
"""
Script to seed the database with the demo staff and today's demo jobs
"""

import os
import sys
from datetime import date

from app.config import require_feature
from app.database import Base, SessionLocal, engine
from app.demo_data import DEMO_STAFF, demo_jobs
from app.models import Job, User
from app.security_utils import hash_password, validate_password_strength

ROLE_BY_LABEL = {"Owner": "owner", "Staff": "staff", "Contractor": "contractor"}


def seed(day: date, password: str):
    require_feature("database")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()

    try:
        print(f"🔍 Seeding demo schedule for {day.isoformat()}...\n")

        user_ids = {}
        for member in DEMO_STAFF:
            first_name, last_name = member["name"].split(" ", 1)
            email = f"{first_name.lower()}@norfolkcleaners.example"
            user = db.query(User).filter(User.email == email).first()
            if user:
                print(f"   - {member['name']} already exists")
            else:
                user = User(
                    email=email,
                    password_hash=hash_password(password),
                    first_name=first_name,
                    last_name=last_name,
                    role=ROLE_BY_LABEL.get(member["role"], "staff"),
                    color=member["color"],
                )
                db.add(user)
                db.flush()
                print(f"   + {member['name']} <{email}>")
            user_ids[member["id"]] = user.id

        added = 0
        for row in demo_jobs(day):
            exists = (
                db.query(Job.id)
                .filter(Job.title == row["title"], Job.start_time == row["start_time"])
                .first()
            )
            if exists:
                continue
            db.add(
                Job(
                    title=row["title"],
                    staff_id=user_ids[row["staff_id"]],
                    start_time=row["start_time"],
                    end_time=row["end_time"],
                    status=row["status"],
                    location=row["location"],
                )
            )
            added += 1

        db.commit()
        print(f"\n✅ Seed completed! Added {added} jobs")

    except Exception as e:
        print(f"❌ Error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_day = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else date.today()
    seed_password = os.getenv("SEED_PASSWORD", "change-me-please")
    validate_password_strength(seed_password)
    seed(seed_day, seed_password)
