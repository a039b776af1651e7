# bugtracer

A small interactive bug tracker for the terminal. Each user has an account
with a bcrypt-hashed password, and users and bugs are kept in a SQLite
database. Once logged in, a user can log bugs, list them, change their status
or description, and delete them.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

The program reads the database location from the `DATABASE_URL` environment
variable; a `.env` file in the working directory is loaded first. The value is
a path to a SQLite file, optionally written as `sqlite:///path/to/bugs.db`
(the `sqlite:///` prefix is stripped). The tables are created on first use.

```
DATABASE_URL=sqlite:///bugs.db
```

If `DATABASE_URL` is not set, the program prints `DATABASE_URL not set` and
exits with status 1.

## Usage

Start a session:

```
bugtracer tracer start
```

The program asks for your username. If the account does not exist, you are
offered registration (answer `Y` or `n`, exactly). After you enter your
password, you are asked what you would like to do. Type one of these commands:

| Command         | What it does                                                         |
|-----------------|----------------------------------------------------------------------|
| `tracer log`    | Log a new bug: a name, then a description ending with a line `END`   |
| `tracer view`   | List all of your bugs with their description and status              |
| `tracer update` | Change a bug's status (`open` or `closed`) or its description        |
| `tracer delete` | Delete a bug after you confirm with your password                    |

Session commands are not case sensitive; the status values are typed in lower
case. Bug names are unique per user: if you try to log a name that already
exists, you are asked for a different one.

Closed bugs are removed automatically once they have been closed for more than
a day. The check runs every time a session starts.

## Limitations

- One session runs one command. After an update, a delete or a declined
  prompt the program ends, and you start it again for the next command.
- Bugs are listed only for the logged-in user; there is no sharing,
  assignment or search between accounts.
- Storage is a local SQLite file; there is no network server.

## Library use

The pieces can also be used directly from Python:

- `bugtracer.args.parse_args` and `bugtracer.args.parse_session_args` check
  command lines and return an `Args` value, or raise `ArgsError` for anything
  they do not recognise.
- `bugtracer.store.BugStore` holds `User` and `Bug` records in SQLite and works
  as a context manager. `hash_password` and `check_password` handle the
  bcrypt hashes.
- `bugtracer.app.Tracer` runs the interactive session on any text streams you
  give it, with an optional password reader; it raises `SessionExit` when the
  session ends the program. `format_bugs` renders a list of bugs as the table
  the program prints, and `run` / `main` are the command entry points.