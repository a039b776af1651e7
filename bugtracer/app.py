"""Interactive bug-tracker session: login, registration and bug commands."""

from __future__ import annotations

import getpass
import os
import sqlite3
import sys
from typing import Callable, Iterable, Optional, Sequence, TextIO

from dotenv import load_dotenv

from bugtracer.args import ArgsError, parse_args, parse_session_args
from bugtracer.store import Bug, BugStore, User, check_password, hash_password

_END_MARKER = "END"
_STATUSES = ("open", "closed")


class SessionExit(Exception):
    """Raised when the session ends the program with an exit code."""

    def __init__(self, code: int = 1) -> None:
        super().__init__(f"session ended with exit code {code}")
        self.code = code


def format_bugs(bugs: Iterable[Bug]) -> str:
    """Render a user's bugs as the numbered table shown after each change."""
    lines = [
        "Here are your logged bugs:",
        "  Bug Name  |  Bug Description  |  Status  ",
    ]
    for number, bug in enumerate(bugs, start=1):
        description = bug.description if bug.description is not None else "no description"
        lines.append(f"{number}.  {bug.name}  |  {description}  |  {bug.status}  ")
    return "\n".join(lines)


def _prompt_password() -> str:
    return getpass.getpass(prompt="")


class Tracer:
    """Drives one interactive session against a :class:`BugStore`."""

    def __init__(
        self,
        store: BugStore,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        read_password: Optional[Callable[[], str]] = None,
    ) -> None:
        self.store = store
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self._err = stderr if stderr is not None else sys.stderr
        self._read_password = read_password or _prompt_password

    # -- terminal helpers -------------------------------------------------

    def _say(self, *lines: str) -> None:
        for line in lines:
            print(line, file=self._out)
        self._out.flush()

    def _prompt(self, text: str) -> None:
        print(text, end="", file=self._out)
        self._out.flush()

    def _warn(self, *lines: str) -> None:
        for line in lines:
            print(line, file=self._err)
        self._err.flush()

    def _ask(self) -> str:
        return self._in.readline().strip()

    def _read_block(self) -> str:
        collected = []
        for line in iter(self._in.readline, ""):
            if line.strip() == _END_MARKER:
                break
            collected.append(line)
        return "".join(collected).strip()

    def _show_bugs(self, user_id: int) -> None:
        self._say(format_bugs(self.store.list_bugs(user_id)))

    # -- entry points ------------------------------------------------------

    def start(self) -> None:
        """Purge old closed bugs, then log a user in or offer registration."""
        self.store.purge_closed()
        self._say("Please enter your username: ")
        username = self._ask()
        if self.store.find_user(username) is not None:
            self.login(username)
            return
        self._say(username, "Username not found", "Do you want to register?(Y/n)")
        response = self._ask()
        if response == "Y":
            self.register()
        elif response == "n":
            self._say("Alright, try again.")
            raise SessionExit(1)
        else:
            self._warn("Unrecognized response.")

    def login(self, username: str) -> None:
        """Ask for the password until it matches, then run one session command."""
        user = self.store.find_user(username)
        if user is None:
            self._say("❌ User not found.")
            return
        self._say("User found.✅")
        self._prompt("Enter your password: ")
        while True:
            password = self._read_password()
            try:
                matched = check_password(password, user.password)
            except ValueError:
                self._say("Failed to verify password.❌")
                continue
            if not matched:
                self._say("Incorrect password.Please try again:")
                continue
            self._say(
                f"User authenticated! Welcome {user.username}",
                "What would you like to do today?(e.g tracer log)",
            )
            items = self._ask().split()
            try:
                self.run_in_session(items, user)
            except sqlite3.Error as exc:
                self._warn(f"Application error: {exc}")
                raise SessionExit(1) from exc
            return

    def register(self) -> None:
        """Create a new user from typed credentials and offer to log in."""
        self._say("Please enter a username:")
        username = self._ask()
        self._say("Please enter a password:")
        password = self._ask()
        try:
            self.store.create_user(username, hash_password(password))
        except ValueError as exc:
            self._say(f"Error creating user: {exc}")
            return
        self._say("User created successfully.", "Do you want to login?(Y/n)")
        response = self._ask()
        if response == "Y":
            self._say("Please enter your username:")
            self.login(self._ask())
        elif response == "n":
            self._say("Alright, try again.")
            raise SessionExit(1)
        else:
            self._say("Unrecognized response.")
            raise SessionExit(1)

    def log(self, user_id: int) -> None:
        """Log a new bug, asking again while the name is already taken."""
        while True:
            self._say("To create a new log, please describe your bug/issue.", "Bug name:")
            bug_name = self._ask()
            if self.store.find_bug(user_id, bug_name) is None:
                break
            self._warn("Sorry, that bug is already logged. Run tracer update to update it.")
        self._say("Bug description (type END to finish):")
        description = self._read_block()
        self.store.add_bug(user_id, bug_name, description)
        self._say("Bug logged successfully.✅")
        self._show_bugs(user_id)

    def view(self, user_id: int) -> None:
        """Show the user's bugs, offering to log one when there are none."""
        bugs = self.store.list_bugs(user_id)
        if not bugs:
            self._say("You haven't logged any bugs.", "Do you wish to log a bug?(Y/n)")
            response = self._ask()
            if response.lower() == "y":
                self.log(user_id)
            elif response.lower() == "n":
                raise SessionExit(1)
            else:
                self._say(f"{response} is not a recognized command.")
                raise SessionExit(1)
        self._say(format_bugs(bugs))

    def update(self, user_id: int) -> None:
        """Change the status or the description of one of the user's bugs."""
        self._say("Update the status of a bug.")
        self.view(user_id)
        self._say("Enter the name of the bug you want to update:")
        bug_name = self._ask()
        bug = self.store.find_bug(user_id, bug_name)
        if bug is None:
            self._warn(f"'{bug_name}' is not logged under this user. Do you wish to log it?(Y/n)")
            response = self._ask()
            if response.lower() == "y":
                self.log(user_id)
                return
            if response.lower() == "n":
                raise SessionExit(1)
            self._warn(f"{response} is not a recognized response")
            raise SessionExit(1)

        self._say("Bug found!", "What would you like to update?(Status/Description)")
        response = self._ask()
        choice = response.lower()
        if choice == "status":
            self._update_status(user_id, bug)
        elif choice == "description":
            self._say(f"Please update the description of '{bug_name}':")
            description = self._read_block()
            if self.store.update_description(bug.id, user_id, description) == 0:
                self._warn("Failed to update description.")
                raise SessionExit(1)
            self._say("Description updated successfully!")
            self.view(user_id)
            raise SessionExit(1)
        else:
            self._warn(f"{response} is not a recognized command")
            raise SessionExit(1)

    def _update_status(self, user_id: int, bug: Bug) -> None:
        self._say(
            "NOTE: Closed bugs are automatically deleted after 24 hours.",
            f"PLease update the status of '{bug.name}'(Open/Closed):",
        )
        status = self._ask()
        current = self.store.bug_status(bug.id)
        if status not in _STATUSES:
            self._say(f"{status} is not a recognized command.")
            raise SessionExit(1)
        if current.lower() == status.lower():
            self._say(f"Bug is already {status}", "Do you still wish to update?(Y/n")
            response = self._ask()
            if response.lower() == "y":
                self.update(user_id)
                return
            if response.lower() == "n":
                raise SessionExit(1)
            self._warn(f"{response} is not a recognized response")
            raise SessionExit(1)
        if self.store.update_status(bug.id, user_id, status) == 0:
            self._warn("Failed to update status.")
            raise SessionExit(1)
        self._say("Status updated successfully!")
        self.view(user_id)
        raise SessionExit(1)

    def delete(self, user_id: int) -> None:
        """Delete one of the user's bugs after the password is confirmed."""
        try:
            self.view(user_id)
        except sqlite3.Error as exc:
            self._warn(f"Application error: {exc}")
            raise SessionExit(1) from exc
        self._say("Which bug would you like to delete?(bug name)")
        bug_name = self._ask()
        user = self.store.user_by_id(user_id)
        bug = self.store.find_bug(user_id, bug_name)
        if bug is None:
            self._say("Bug not found.", "DO you wish to create it?(Y/n)")
            response = self._ask()
            if response.lower() == "y":
                self.log(user_id)
                return
            if response.lower() == "n":
                raise SessionExit(1)
            self._warn(f"{response} is not a recognized response")
            raise SessionExit(1)

        self._say("Please enter your password to confirm action:")
        while True:
            password = self._read_password()
            try:
                matched = check_password(password, user.password)
            except ValueError:
                self._warn("Failed to verify password, please try again.")
                continue
            if matched:
                break
            self._say("Incorrect password. Please try again")
        self._say("Confirmed.")
        if self.store.delete_bug(bug.id, user_id) == 0:
            self._warn("Failed to delete bug.")
            raise SessionExit(1)
        self._say("Bug deleted successfully!")
        self.view(user_id)
        raise SessionExit(1)

    def run_in_session(self, items: Sequence[str], user: User) -> None:
        """Dispatch a command typed after login, such as ``tracer view``."""
        try:
            args = parse_session_args(items)
        except ArgsError as exc:
            if exc.allowed:
                self._say(f"Allowed commands: {','.join(exc.allowed)}")
            self._warn(f"Error parsing arguments: {exc}")
            raise SessionExit(1) from exc
        actions = {
            "log": self.log,
            "view": self.view,
            "update": self.update,
            "delete": self.delete,
        }
        actions[args.query](user.id)


def _database_path(url: str) -> str:
    prefix = "sqlite:///"
    return url[len(prefix):] if url.startswith(prefix) else url


def run(argv: Sequence[str]) -> int:
    """Run the program for the given process arguments; return the exit code."""
    try:
        args = parse_args(argv)
    except ArgsError as exc:
        print(f"Error parsing arguments: {exc}", file=sys.stderr)
        return 1
    if args.query != "start":
        return 0
    print("🔧 Welcome to TRACER: A CLI BUg Tracker🔧")
    load_dotenv()
    url = os.environ.get("DATABASE_URL")
    if not url:
        print("DATABASE_URL not set", file=sys.stderr)
        return 1
    with BugStore(_database_path(url)) as store:
        try:
            Tracer(store).start()
        except SessionExit as exc:
            return exc.code
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point."""
    return run(list(sys.argv if argv is None else argv))