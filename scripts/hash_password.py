import argparse
import getpass
import secrets

from vitrine.config import get_settings
from vitrine.core.admin_auth import hash_password


def parse_args():
    parser = argparse.ArgumentParser(
        description="Print ADMIN_PASSWORD_SALT / ADMIN_PASSWORD_HASH values for the .env file."
    )
    parser.add_argument("--rounds", type=int, default=None, help="PBKDF2 rounds (defaults to settings).")
    return parser.parse_args()


def main():
    args = parse_args()
    rounds = args.rounds or get_settings().ADMIN_PBKDF2_ROUNDS

    password = getpass.getpass("Admin password: ")
    if not password:
        raise SystemExit("Password must not be empty.")
    if password != getpass.getpass("Repeat password: "):
        raise SystemExit("Passwords do not match.")

    salt = secrets.token_hex(16)
    print("ADMIN_PASSWORD_SALT={}".format(salt))
    print("ADMIN_PASSWORD_HASH={}".format(hash_password(password, salt, rounds)))
    if args.rounds:
        print("ADMIN_PBKDF2_ROUNDS={}".format(rounds))


if __name__ == "__main__":
    main()
