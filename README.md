# todocli

A small terminal to-do list manager. Tasks live in a MySQL database and are
managed with the `todo` command: add them, list them, update them, mark them
completed and delete them.

## Installation

```
pip install .
```

The `todo` command connects to MySQL through SQLAlchemy's `mysql+pymysql`
dialect, so the PyMySQL driver has to be installed alongside:

```
pip install pymysql
```

## Configuration

`todo` reads a configuration file, YAML (`.yaml`/`.yml`) or JSON (`.json`).
Give its path in the `ConfigPath` environment variable, or pass it with
`--config`:

```yaml
env: local
mysql:
  host: localhost
  port: 3306
  user: root
  password: password
  dbname: todo
```

`env` and `mysql.dbname` are required. `host`, `port` and `user` default to
`localhost`, `3306` and `root` when missing or empty. The values of `env`,
`host`, `port`, `user` and `password` are overridden by the `ENV`, `HOST`,
`PORT`, `USER` and `PASSWORD` environment variables whenever those are set —
note that many shells set `USER` to the login name, which then takes
precedence over the file.

On first use the `tasks` table is created in the configured database.

## Usage

```
todo --config config.yaml add --title "Buy groceries" --desc "Milk, eggs, bread"
todo --config config.yaml list
todo --config config.yaml list --pending
todo --config config.yaml update --id 3 --title "New title"
todo --config config.yaml markcompleted --id 3
todo --config config.yaml delete --id 3
```

With `ConfigPath` set in the environment, `--config` can be left out:

```
todo list
```

### Commands

- `add -t/--title TITLE [-d/--desc DESCRIPTION]` adds a pending task. The
  title is required.
- `list [-p/--pending]` shows every task, or only the pending ones, ordered by
  ID, in a table with the ID, title, a completion mark (✅ or ❌) and how long
  ago the task was created, updated and completed (for example
  `3 hours ago`; `-` where there is no time).
- `update -i/--id ID [-t/--title TITLE] [-d/--desc DESCRIPTION]` changes the
  title, the description or both. If neither is given, a message says so and
  nothing changes.
- `markcompleted -i/--id ID` marks a task completed and records when.
- `delete -i/--id ID` deletes a task. The row is kept with a deletion time
  and no longer appears in any listing or takes any further update.

An ID of 0, or a missing ID, is rejected. Errors are written to standard
error and the command exits with status 1.

## Library use

The pieces behind the command can be used directly:

- `todocli.config.find_config_path` and `todocli.config.load_config` locate
  and read a configuration file into a `Config` (with a `MySQLConfig`),
  raising `ConfigError` on problems.
- `todocli.database.mysql_url` builds the connection URL;
  `todocli.database.connect` opens the MySQL database, and
  `todocli.database.open_database` does the same for any SQLAlchemy URL
  (for example `sqlite://`). Both create the tables and return a session
  factory, raising `ConnectionError` on failure.
- `todocli.models.Task` is the mapped task table.
- `todocli.repository` holds `add_task`, `delete_task`, `mark_complete`,
  `get_all_tasks`, `pending_tasks` and `update_task`, which work on a
  session and raise `RepositoryError` on failure.
- `todocli.display.time_diff`, `format_tasks` and `print_tasks` render
  relative times and the task table.
- `todocli.cli.run(argv, session_factory, out)` runs one command against any
  session factory and returns the exit code.

## Running the tests

```
pip install ".[test]"
pytest
```