"""Login and registration conversation for line-mode terminals."""

from __future__ import annotations

import hashlib
import hmac
import logging
import re
import secrets
from dataclasses import dataclass
from typing import Protocol, Union

from webbs_terminal.codec.ansi_encoder import color_sequence, reset

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,20}$")
MIN_PASSWORD_LENGTH = 6


class AccountExistsError(ValueError):
    """Registration clashed with an existing username or email."""


@dataclass(frozen=True)
class Account:
    username: str
    display_name: str
    user_level: int = 1
    account_id: int | None = None


class AccountDirectory(Protocol):
    """Where accounts live; supplied by the hosting application."""

    def authenticate(self, username: str, password: str) -> Account | None: ...

    def register(self, username: str, email: str, password: str, display_name: str) -> Account: ...


# -----------------------------------------------------------------------------
# States
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Guest:
    pass


@dataclass(frozen=True)
class AwaitingLoginUsername:
    pass


@dataclass(frozen=True)
class AwaitingLoginPassword:
    username: str


@dataclass(frozen=True)
class AwaitingRegUsername:
    pass


@dataclass(frozen=True)
class AwaitingRegEmail:
    username: str


@dataclass(frozen=True)
class AwaitingRegPassword:
    username: str
    email: str


@dataclass(frozen=True)
class AwaitingRegDisplayName:
    username: str
    email: str
    password: str

    def __repr__(self) -> str:
        return f"AwaitingRegDisplayName(username={self.username!r}, email={self.email!r})"


@dataclass(frozen=True)
class Authenticated:
    account: Account


DialogueState = Union[
    Guest,
    AwaitingLoginUsername,
    AwaitingLoginPassword,
    AwaitingRegUsername,
    AwaitingRegEmail,
    AwaitingRegPassword,
    AwaitingRegDisplayName,
    Authenticated,
]

_LOGIN_STATES = (AwaitingLoginUsername, AwaitingLoginPassword)
_REGISTRATION_STATES = (AwaitingRegUsername, AwaitingRegEmail, AwaitingRegPassword, AwaitingRegDisplayName)


@dataclass(frozen=True)
class DialogueReply:
    """Text to show the user and the prompt to print after it."""
    text: str
    prompt: str


def prompt_for(state: DialogueState) -> str:
    """Context-aware input prompt."""
    if isinstance(state, _REGISTRATION_STATES):
        return "REG> "
    if isinstance(state, _LOGIN_STATES):
        return "LOGIN> "
    if isinstance(state, Authenticated):
        return f"{state.account.username}> "
    return "BBS> "


def _info(text: str) -> str:
    return f"{color_sequence(3)}{text}{reset()}"


def _error(text: str) -> str:
    return f"{color_sequence(1)}{text}{reset()}"


def _success(text: str) -> str:
    return f"{color_sequence(2)}{text}{reset()}"


class LoginDialogue:
    """
    Drives the multi-step login and registration exchange.

    Each state carries exactly the answers collected so far, so a
    half-finished registration cannot be mistaken for a login. All
    methods are pure with respect to the dialogue: they take a
    state and return the next one with a reply; the caller stores
    the state in its session.

    Any failed step returns the user to Guest.
    """

    def __init__(self, accounts: AccountDirectory):
        self.accounts = accounts

    def start_login(self, state: DialogueState) -> tuple[DialogueState, DialogueReply]:
        if isinstance(state, Authenticated):
            return self._reply(state, _error("You are already logged in."))
        return self._reply(AwaitingLoginUsername(), _info("Enter username:"))

    def start_registration(self, state: DialogueState) -> tuple[DialogueState, DialogueReply]:
        if isinstance(state, Authenticated):
            return self._reply(state, _error("You are already logged in."))
        return self._reply(AwaitingRegUsername(), _info("Enter username:"))

    def logout(self, state: DialogueState) -> tuple[DialogueState, DialogueReply]:
        if not isinstance(state, Authenticated):
            return self._reply(state, _error("You are not logged in."))
        logger.info("User %s logged out", state.account.username)
        return self._reply(Guest(), _success(f"Goodbye, {state.account.display_name}!"))

    def handle(self, state: DialogueState, line: str) -> tuple[DialogueState, DialogueReply]:
        """Feed one line of user input to the dialogue."""
        answer = line.strip()

        if isinstance(state, AwaitingLoginUsername):
            return self._reply(AwaitingLoginPassword(answer), _info("Enter password:"))

        if isinstance(state, AwaitingLoginPassword):
            return self._finish_login(state.username, answer)

        if isinstance(state, AwaitingRegUsername):
            return self._reply(AwaitingRegEmail(answer), _info("Enter email address:"))

        if isinstance(state, AwaitingRegEmail):
            return self._reply(AwaitingRegPassword(state.username, answer), _info("Enter password:"))

        if isinstance(state, AwaitingRegPassword):
            return self._reply(
                AwaitingRegDisplayName(state.username, state.email, answer),
                _info("Enter display name (optional):"),
            )

        if isinstance(state, AwaitingRegDisplayName):
            return self._finish_registration(state, answer or state.username)

        # Guest or Authenticated: nothing is in progress
        return self._reply(state, "")

    def _finish_login(self, username: str, password: str) -> tuple[DialogueState, DialogueReply]:
        account = self.accounts.authenticate(username, password)
        if account is None:
            logger.info("Failed login for %r", username)
            return self._reply(Guest(), _error("Invalid username or password."))

        logger.info("User %s logged in", account.username)
        text = "\n".join([
            _success("LOGIN SUCCESSFUL"),
            f"Welcome back, {account.display_name}!",
            f"Access level: {account.user_level}",
        ])
        return self._reply(Authenticated(account), text)

    def _finish_registration(
        self, state: AwaitingRegDisplayName, display_name: str
    ) -> tuple[DialogueState, DialogueReply]:
        if not USERNAME_PATTERN.match(state.username):
            return self._reply(Guest(), _error(
                "Invalid username. Must be 3-20 characters, letters/numbers/underscores only."))

        if len(state.password) < MIN_PASSWORD_LENGTH:
            return self._reply(Guest(), _error(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."))

        try:
            account = self.accounts.register(state.username, state.email, state.password, display_name)
        except AccountExistsError:
            logger.info("Registration rejected for %r: account exists", state.username)
            return self._reply(Guest(), _error("Username or email already exists."))

        logger.info("Registered user %s", account.username)
        text = "\n".join([
            _success("REGISTRATION SUCCESSFUL"),
            f"Welcome, {account.display_name}!",
            f"Username: {account.username}",
            "Type login to access your new account.",
        ])
        return self._reply(Guest(), text)

    @staticmethod
    def _reply(state: DialogueState, text: str) -> tuple[DialogueState, DialogueReply]:
        return state, DialogueReply(text, prompt_for(state))


class MemoryAccountDirectory:
    """In-memory AccountDirectory with salted password hashes."""

    def __init__(self, iterations: int = 10_000):
        self.iterations = iterations
        self._accounts: dict[str, tuple[Account, str, bytes, bytes]] = {}
        self._next_id = 1

    def _hash(self, password: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, self.iterations)

    def register(self, username: str, email: str, password: str, display_name: str) -> Account:
        key = username.lower()
        if key in self._accounts or any(e == email.lower() for _, e, _, _ in self._accounts.values()):
            raise AccountExistsError(username)
        account = Account(username, display_name or username, account_id=self._next_id)
        self._next_id += 1
        salt = secrets.token_bytes(16)
        self._accounts[key] = (account, email.lower(), salt, self._hash(password, salt))
        return account

    def authenticate(self, username: str, password: str) -> Account | None:
        entry = self._accounts.get(username.lower())
        if entry is None:
            return None
        account, _, salt, digest = entry
        if not hmac.compare_digest(self._hash(password, salt), digest):
            return None
        return account

    def set_level(self, username: str, user_level: int) -> Account:
        """Change an account's access level (sysop action)."""
        account, email, salt, digest = self._accounts[username.lower()]
        account = Account(account.username, account.display_name, user_level, account.account_id)
        self._accounts[username.lower()] = (account, email, salt, digest)
        return account
