"""
Create a user from the command line. Run from project root:
  python -m account_api.scripts.create_user USERNAME PASSWORD [--fullname NAME] [--lastname NAME]
Example:
  python -m account_api.scripts.create_user john 'a-strong-password' --fullname John --lastname Doe
"""
import argparse
import sys

from account_api.core.config import get_settings
from account_api.core.database import SessionLocal, check_db_connected
from account_api.core.errors import ServiceError
from account_api.schemas.user import UserCreate
from account_api.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an account (password is stored hashed).")
    parser.add_argument("username", help="Username (1-100 chars)")
    parser.add_argument("password", help="Password")
    parser.add_argument("--firstname", default=None)
    parser.add_argument("--fullname", default=None)
    parser.add_argument("--lastname", default=None)
    args = parser.parse_args(argv)

    data = UserCreate(
        username=args.username,
        password=args.password,
        firstname=args.firstname,
        fullname=args.fullname,
        lastname=args.lastname,
    )
    if len(data.username) > 100:
        print("Invalid username length.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if not check_db_connected(db):
            print("Database is not reachable.", file=sys.stderr)
            return 1
        user = create_user(db, data, get_settings().BCRYPT_ROUNDS)
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with id {user.id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
