"""
Create a user from the command line. Run from project root:
  python -m soundshare.scripts.create_user USERNAME PASSWORD
"""
import argparse
import logging
import sys

from soundshare.core.config import get_settings
from soundshare.core.database import create_db_engine, create_session_factory
from soundshare.core.errors import SoundshareError
from soundshare.services.auth_service import register_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Soundshare user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password")
    args = parser.parse_args(argv)

    engine = create_db_engine(get_settings())
    db = create_session_factory(engine)()
    try:
        user = register_user(db, args.username, args.password)
    except SoundshareError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()
    print(f"Created user '{user.username}' (id={user.id}).")
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    sys.exit(main())
