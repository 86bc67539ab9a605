"""
Create an admin account, or promote an existing user to ADMIN.

    python -m scripts.create_admin_user admin@bookshuttles.com 's3cret'
"""
import argparse

from app.core.security import ADMIN_ROLE, hash_password
from app.db.session import SessionLocal
from app.db.models.user import User


def upsert_admin(db, email: str, password: str | None) -> User:
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        if not password:
            raise SystemExit("A password is required to create a new admin")
        user = User(email=email, password_hash=hash_password(password), role=ADMIN_ROLE, is_active=True)
        db.add(user)
        return user

    user.role = ADMIN_ROLE
    user.is_active = True
    if password:
        user.password_hash = hash_password(password)
    return user


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("password", nargs="?")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        user = upsert_admin(db, args.email, args.password)
        db.commit()
        print(f"Admin ready: {user.email} (id={user.id})")
    except Exception as e:
        db.rollback()
        print("Admin setup failed:", e)
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
