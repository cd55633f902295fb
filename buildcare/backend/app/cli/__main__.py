# backend/app/cli/__main__.py
from __future__ import annotations

import argparse

from app.cli.seed_demo import seed_demo
from app.services.auth_service import create_access_token


def main() -> None:
    p = argparse.ArgumentParser(prog="python -m app.cli")
    sub = p.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="create the admin identity, sample apartments and coupons")
    seed.add_argument("--admin-email", default="admin@buildcare.local")
    seed.add_argument("--admin-name", default="Admin")
    seed.add_argument("--no-inventory", action="store_true")

    token = sub.add_parser("token", help="mint a bearer credential for an email")
    token.add_argument("email")
    token.add_argument("--days", type=int, default=None)

    args = p.parse_args()

    if args.command == "seed":
        out = seed_demo(
            admin_email=args.admin_email,
            admin_name=args.admin_name,
            with_inventory=(not args.no_inventory),
        )
        print(
            {
                "ok": True,
                "admin_email": out.admin_email,
                "apartments_added": out.apartments_added,
                "coupons_added": out.coupons_added,
            }
        )
    elif args.command == "token":
        print(create_access_token(email=args.email, days=args.days))


if __name__ == "__main__":
    main()
