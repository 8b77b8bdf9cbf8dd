"""Print a bearer token for an existing user.

Login lives in the identity service; this helper lets developers call the
messaging API locally without it.
"""
from __future__ import annotations

import argparse
import sys

from campus_market.core.security import create_access_token
from campus_market.db.session import SessionLocal
from campus_market.models import User


def issue_token(uid: str, expires_minutes: int | None = None) -> str:
    """Return a token for `uid`, which must exist and not be suspended."""
    db = SessionLocal()
    try:
        user = db.get(User, uid)
        if user is None:
            raise SystemExit(f"No user with uid {uid!r}")
        if user.is_blacklisted:
            raise SystemExit(f"User {uid!r} is suspended")
        return create_access_token(
            user.uid,
            role=user.role,
            email=user.email,
            expires_minutes=expires_minutes,
        )
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("uid", help="uid of the user to impersonate")
    parser.add_argument("--expires-minutes", type=int, default=None)
    args = parser.parse_args(argv)
    print(issue_token(args.uid, args.expires_minutes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
