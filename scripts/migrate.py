"""Run front desk schema migrations.

Usage:
    python scripts/migrate.py                     upgrade to head
    python scripts/migrate.py upgrade <revision>
    python scripts/migrate.py downgrade <revision>
    python scripts/migrate.py create <message>
    python scripts/migrate.py current
"""

import sys

from alembic import command
from alembic.config import Config

USAGE = __doc__.split("Usage:")[1]


def _config() -> Config:
    return Config("alembic.ini")


def upgrade(revision: str = "head") -> None:
    """Upgrade the schema to a revision."""
    print(f"Upgrading schema to {revision}...")
    command.upgrade(_config(), revision)


def downgrade(revision: str) -> None:
    """Downgrade the schema to a revision; "base" drops every front desk table."""
    print(f"Downgrading schema to {revision}...")
    command.downgrade(_config(), revision)


def create(message: str) -> None:
    """Autogenerate a revision from the table definitions in clinic_desk.models."""
    print(f"Creating migration: {message}")
    command.revision(_config(), message=message, autogenerate=True)


def current() -> None:
    """Print the revision the database is at."""
    command.current(_config(), verbose=True)


def main(argv: list[str]) -> int:
    if not argv:
        action, args = upgrade, []
    elif argv[0] == "current" and len(argv) == 1:
        action, args = current, []
    elif argv[0] == "create" and len(argv) > 1:
        action, args = create, [" ".join(argv[1:])]
    elif argv[0] in ("upgrade", "downgrade") and len(argv) == 2:
        action, args = (upgrade if argv[0] == "upgrade" else downgrade), [argv[1]]
    else:
        print(f"Usage:{USAGE}", file=sys.stderr)
        return 2

    try:
        action(*args)
    except Exception as e:
        print(f"✗ Migration command failed: {e}", file=sys.stderr)
        return 1

    print("✓ Done")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
