# WorkHours - Authentication Service
# Password hashing, session management, login/logout

from datetime import timedelta
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.user import User
from app.models.user_session import UserSession


settings = get_settings()

# Password hashing configuration
# Using bcrypt with automatic salt generation
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,
)


class AuthenticationError(Exception):
    """Raised when authentication fails."""
    pass


class AuthService:
    """
    Authentication service for login, logout, and session management.

    Usage:
        auth = AuthService(db)

        # Login
        user, session = auth.login("jsmith", "password123")

        # Validate session
        user = auth.validate_session(session.session_token)

        # Logout
        auth.logout(session.session_token)

    Sessions are stored in the database for easy invalidation.
    """

    def __init__(self, db: Session):
        self.db = db

    def hash_password(self, plain_password: str) -> str:
        """Hash a plain text password with bcrypt."""
        return pwd_context.hash(plain_password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain text password against a hash.

        Returns True if password matches, False otherwise.
        """
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            # Malformed hash or password over bcrypt's 72-byte limit
            return False

    def create_user(
        self,
        username: str,
        display_name: str,
        password: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """
        Create a new user account.

        Raises:
            ValueError: If the username is already taken
        """
        existing = self.db.execute(
            select(User.user_id).where(User.username == username)
        ).scalar_one_or_none()
        if existing is not None:
            raise ValueError(f"Username '{username}' is already taken")

        user = User(
            username=username,
            display_name=display_name,
            email=email,
            password_hash=self.hash_password(password) if password else None,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def authenticate(self, username: str, password: str) -> User:
        """
        Authenticate a user by username and password.

        Raises:
            AuthenticationError: If credentials are invalid or account is inactive
        """
        user = self.db.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

        if not user:
            # Don't reveal whether username exists
            raise AuthenticationError("Invalid username or password")

        if not user.is_active:
            raise AuthenticationError("Account is inactive")

        if not user.password_hash:
            raise AuthenticationError("Account has no password set")

        if not self.verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid username or password")

        return user

    def login(
        self,
        username: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> tuple[User, UserSession]:
        """
        Authenticate user and create a new session.

        Returns:
            Tuple of (User, UserSession)

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = self.authenticate(username, password)

        session = UserSession.issue(
            user.user_id,
            timedelta(minutes=settings.session_expire_minutes),
            ip_address=ip_address,
            user_agent=user_agent,
        )

        self.db.add(session)
        self.db.commit()

        return user, session

    def validate_session(self, session_token: str) -> Optional[User]:
        """
        Validate a session token and return the associated user.

        Returns:
            The User if session is valid, None otherwise
        """
        session = self.db.execute(
            select(UserSession)
            .where(UserSession.session_token == session_token)
            .where(UserSession.is_active == True)
        ).scalar_one_or_none()

        if not session:
            return None

        if session.is_expired():
            session.is_active = False
            self.db.commit()
            return None

        user = self.db.execute(
            select(User)
            .where(User.user_id == session.user_id)
            .where(User.is_active == True)
        ).scalar_one_or_none()

        if not user:
            return None

        session.touch()
        self.db.commit()

        return user

    def logout(self, session_token: str) -> bool:
        """
        Invalidate a session.

        Returns:
            True if session was found and invalidated, False otherwise
        """
        session = self.db.execute(
            select(UserSession)
            .where(UserSession.session_token == session_token)
        ).scalar_one_or_none()

        if not session:
            return False

        session.end()
        self.db.commit()

        return True

    def set_password(self, user: User, new_password: str) -> None:
        """Set or update a user's password. The caller commits."""
        user.password_hash = self.hash_password(new_password)
