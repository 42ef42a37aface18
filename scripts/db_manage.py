#!/usr/bin/env python
"""
WorkHours - Database and Job Management CLI

Usage:
    python -m scripts.db_manage check            # Test database connection
    python -m scripts.db_manage migrate          # Run pending migrations
    python -m scripts.db_manage rollback         # Rollback last migration
    python -m scripts.db_manage current          # Show current migration version
    python -m scripts.db_manage history          # Show migration history
    python -m scripts.db_manage reset            # Drop all and recreate (dev only)
    python -m scripts.db_manage createuser       # Create a user with a password
    python -m scripts.db_manage setpassword      # Set password for a user
    python -m scripts.db_manage autoapprove      # Approve eligible entries for all users once
    python -m scripts.db_manage autoapprove-loop # Same, repeated every WORKHOURS_AUTO_APPROVE_INTERVAL_MINUTES

Cron example (hourly):
    0 * * * * cd /srv/workhours && python -m scripts.db_manage autoapprove
"""

import sys
from getpass import getpass

from sqlalchemy import select

from app.config import get_settings
from app.database import check_connection, get_db_context
from app.logging_config import configure_logging


settings = get_settings()


def _alembic_config():
    from alembic.config import Config
    return Config("alembic.ini")


def cmd_check():
    """Test database connection."""
    target = settings.db_url or f"{settings.db_server}/{settings.db_name}"
    print(f"Connecting to: {target}")
    try:
        check_connection()
        print("Connection successful!")
        return True
    except Exception as e:
        print(f"Connection failed: {e}")
        return False


def cmd_migrate():
    """Run pending Alembic migrations."""
    from alembic import command

    print("Running migrations...")
    command.upgrade(_alembic_config(), "head")
    print("Migrations complete!")
    return True


def cmd_rollback():
    """Rollback the last migration."""
    if not settings.debug:
        print("ERROR: rollback is only available in debug mode")
        return False

    from alembic import command

    print("Rolling back last migration...")
    command.downgrade(_alembic_config(), "-1")
    print("Rollback complete!")
    return True


def cmd_current():
    """Show current migration version."""
    from alembic import command

    command.current(_alembic_config())
    return True


def cmd_history():
    """Show migration history."""
    from alembic import command

    command.history(_alembic_config())
    return True


def cmd_reset():
    """Drop all tables and recreate with migrations."""
    if not settings.debug:
        print("ERROR: reset is only available in debug mode")
        return False

    confirm = input("This will DELETE ALL DATA. Type 'yes' to confirm: ")
    if confirm.lower() != "yes":
        print("Aborted")
        return False

    from alembic import command

    alembic_cfg = _alembic_config()

    print("Rolling back all migrations...")
    try:
        command.downgrade(alembic_cfg, "base")
    except Exception as e:
        print(f"Rollback failed (maybe no tables exist): {e}")

    print("Running all migrations...")
    command.upgrade(alembic_cfg, "head")

    print("Reset complete!")
    return True


def _prompt_password():
    """Ask for a password twice; returns None if it is unusable."""
    password = getpass("Password: ")
    confirm = getpass("Confirm password: ")

    if password != confirm:
        print("Passwords do not match")
        return None

    if len(password) < 8:
        print("Password must be at least 8 characters")
        return None

    # Bcrypt has a 72-byte limit
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 72:
        print(f"Password is too long ({len(password_bytes)} bytes).")
        print("Bcrypt has a 72-byte limit. Use ASCII characters and keep password under 72 bytes.")
        return None

    return password


def cmd_createuser():
    """Create a user account."""
    from app.services.auth import AuthService

    username = input("Username: ").strip()
    if not username:
        print("Username required")
        return False

    display_name = input("Display name: ").strip() or username
    email = input("Email (optional): ").strip() or None

    password = _prompt_password()
    if password is None:
        return False

    with get_db_context() as db:
        try:
            user = AuthService(db).create_user(username, display_name, password, email)
        except ValueError as e:
            print(e)
            return False
        db.commit()
        print(f"Created user {user.username} (id {user.user_id})")

    return True


def cmd_setpassword():
    """Set password for a user."""
    from app.models.user import User
    from app.services.auth import AuthService

    username = input("Username: ").strip()
    if not username:
        print("Username required")
        return False

    with get_db_context() as db:
        user = db.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

        if not user:
            print(f"User '{username}' not found")
            return False

        password = _prompt_password()
        if password is None:
            return False

        AuthService(db).set_password(user, password)
        db.commit()

        print(f"Password updated for {user.display_name}")

    return True


def cmd_autoapprove():
    """Approve eligible entries for every user once."""
    from app.jobs import run_auto_approval

    updated = run_auto_approval()
    print(f"Auto-approved {updated} work hours entries")
    return True


def cmd_autoapprove_loop():
    """Approve eligible entries for every user on a fixed cadence."""
    from app.jobs import run_auto_approval_forever

    interval = settings.auto_approve_interval_minutes
    print(f"Auto-approving every {interval} minutes (Ctrl+C to stop)")
    try:
        run_auto_approval_forever(interval)
    except KeyboardInterrupt:
        print("Stopped")
    return True


def cmd_help():
    """Show help."""
    print(__doc__)
    return True


COMMANDS = {
    "check": cmd_check,
    "migrate": cmd_migrate,
    "rollback": cmd_rollback,
    "current": cmd_current,
    "history": cmd_history,
    "reset": cmd_reset,
    "createuser": cmd_createuser,
    "setpassword": cmd_setpassword,
    "autoapprove": cmd_autoapprove,
    "autoapprove-loop": cmd_autoapprove_loop,
    "help": cmd_help,
}


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    configure_logging(settings.log_level)

    if not argv:
        cmd_help()
        sys.exit(1)

    command = argv[0].lower()

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        cmd_help()
        sys.exit(1)

    success = COMMANDS[command]()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
