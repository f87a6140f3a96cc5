# scripts/create_admin.py
"""
Create an admin account, or reset the password of an existing one.

    python -m scripts.create_admin <username> <password> [--superadmin]
"""
import argparse

from sqlalchemy.orm import Session

from siteadmin.core.logging import configure_logging
from siteadmin.db.session import SessionLocal
from siteadmin.models.auth import AdminRole
from siteadmin.services.auth_service import create_admin_user, get_admin_by_username
from siteadmin.services.passwords import hash_password


def run(username: str, password: str, superadmin: bool = False) -> None:
    role = AdminRole.superadmin if superadmin else AdminRole.admin
    db: Session = SessionLocal()
    try:
        admin = get_admin_by_username(db, username)
        if admin:
            admin.hashed_password = hash_password(password)
            admin.role = role.value
            print(f"[OK] Updated {username} ({role.value})")
        else:
            create_admin_user(db, username=username, password=password, role=role)
            print(f"[OK] Created {username} ({role.value})")
        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    parser = argparse.ArgumentParser(description="Create or update an admin user")
    parser.add_argument("username")
    parser.add_argument("password")
    parser.add_argument("--superadmin", action="store_true")
    args = parser.parse_args()
    run(args.username, args.password, args.superadmin)
