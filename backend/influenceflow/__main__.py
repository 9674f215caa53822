"""
InfluenceFlow command line.

    python -m influenceflow serve
    python -m influenceflow local seed|signup|login|logout|whoami
"""

import argparse
import logging
import sys

from .core.config import Settings
from .services.auth_exceptions import AuthError
from .services.local_session_store import FileLocalStorage, LocalAuthService, LocalAuthStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="influenceflow", description="InfluenceFlow auth backend")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    local = sub.add_parser("local", help="Local demo accounts (plaintext, device-only)")
    local.add_argument("--storage", default=None, help="Path of the local storage JSON file")
    local_sub = local.add_subparsers(dest="action", required=True)
    local_sub.add_parser("seed", help="Create the demo account if no accounts exist")
    for name in ("signup", "login"):
        p = local_sub.add_parser(name)
        p.add_argument("--name", required=True, dest="full_name")
        p.add_argument("--email", required=True)
        p.add_argument("--password", required=True)
    local_sub.add_parser("logout", help="Clear the current user")
    local_sub.add_parser("whoami", help="Show the current user")

    return parser


def run_local(args, settings: Settings) -> int:
    storage = FileLocalStorage(args.storage or settings.LOCAL_STORAGE_PATH)
    store = LocalAuthStore(storage)
    service = LocalAuthService(store)

    # Same bootstrap order as the app pages: seed first, then act.
    seeded = store.seed_demo_user_if_needed()
    if args.action == "seed":
        print("Demo account created." if seeded else "Accounts already exist.")
        return 0

    try:
        if args.action == "signup":
            user = service.sign_up(args.full_name, args.email, args.password)
        elif args.action == "login":
            user = service.login(args.full_name, args.email, args.password)
        elif args.action == "logout":
            service.logout()
            print("Logged out.")
            return 0
        else:
            user = service.require_current_user()
    except AuthError as e:
        print(e.message, file=sys.stderr)
        return 1

    print(f"{user.get('fullName') or 'Logged in'} <{user.get('email') or ''}>")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        import uvicorn

        uvicorn.run(
            "influenceflow.main:create_app",
            factory=True,
            host=args.host or settings.HOST,
            port=args.port or settings.PORT,
            log_level="debug" if settings.DEBUG else "info",
        )
        return 0

    return run_local(args, settings)


if __name__ == "__main__":
    sys.exit(main())
