import sys
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlmodel import Session

from bookcatalog.config import settings
from bookcatalog.core.security import PlaintextPassword, hash_password
from bookcatalog.database import engine, init_db
from bookcatalog.models.user import User, UserRole
from bookcatalog.repositories.base import UserRepository
from bookcatalog.services.auth_service import normalize_email


def main(argv):
    if len(argv) != 5:
        print("Usage: python scripts/create_admin.py EMAIL PASSWORD FIRST_NAME LAST_NAME")
        return 1

    _, email, password, first_name, last_name = argv
    email = normalize_email(email)
    print(f"Database URL: {settings.database_url}")
    init_db()

    with Session(engine) as session:
        users = UserRepository(session)
        user = users.find_by_email(email, include_deleted=True)
        if user is not None:
            if user.deleted_at is not None:
                print(f"User {email} is deleted. Nothing to do.")
                return 1
            user.role = UserRole.ADMIN
            users.save(user)
            print(f"User {email} promoted to admin.")
            return 0

        users.save(
            User(
                email=email,
                password_hash=hash_password(PlaintextPassword(password)),
                first_name=first_name,
                last_name=last_name,
                role=UserRole.ADMIN,
            )
        )
        print(f"Admin {email} created.")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
