# expensetracker

A small HTTP service that stores income and expense records in a SQLite database and
returns them as JSON, together with income and expense totals.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Configuration

Settings come from the environment. A dotenv file (`.env` in the working directory
by default) is read first if it exists; variables already set in the environment
take precedence over the file.

- `PORT`: the port the server listens on.
- `DB_POSTGRES_URL`: where the SQLite database lives. Either a file path or a
  `sqlite:///path` URL; `sqlite://` with no path gives an in-memory database.
  An empty value stops the server at start-up with a `DatabaseError`.

On start-up the server creates the `expenses` table and its indexes if the table is
missing and, if the table is empty, fills it with ten sample records, one per day
over the last ten days.

## Running

    expensetracker

or, to read a different dotenv file:

    expensetracker --env-file path/to/settings.env

The server listens on all interfaces and logs `Serving on http://localhost:<PORT>`.

## Endpoints

| Method   | Path                 | What it does                                    |
|----------|----------------------|-------------------------------------------------|
| `GET`    | `/expenses`          | One page of records plus income/expense totals  |
| `GET`    | `/expenses/summary`  | Totals only                                     |
| `POST`   | `/expenses`          | Create a record, returns it as stored           |
| `PUT`    | `/expenses/<id>`     | Replace every field of a record                 |
| `DELETE` | `/expenses/<id>`     | Delete a record, reports the rows affected      |

The listing and summary endpoints accept these query parameters (empty values are
ignored):

- `page` (default 1) and `pageSize` (default 10). Values that are not integers count
  as 0; a negative page size or offset is answered with status 400.
- `category`: matched with a case-sensitive SQL `LIKE`, so `%` works as a wildcard.
- `dtIni` and `dtEnd`: inclusive lower and upper bounds on the date, in ISO 8601
  form. Any time-zone offset is dropped; an unreadable date gives status 400.

Records are returned newest first. The totals cover the same page the filter selects.

A record sent to `POST` or `PUT` is a JSON object with `date`, `amount`, `type`
(`income` or `expense`) and `category`:

    {"date": "2024-05-01", "amount": 42.5, "type": "expense", "category": "Groceries"}

`amount`, `type` and `category` are required. `date` must be an ISO 8601 timestamp;
amounts are rounded to two decimals and must stay below 100,000,000 in size. An id
in the path that is not an integer is taken as 0. Updating or deleting an id that
does not exist is not an error; `DELETE` then reports `rows affected: 0`.

## Responses

Every response is a JSON object with up to three members; empty ones are left out:

    {"status": 200, "payload": {...}, "message": "..."}

A record in a payload carries `ID`, `date` (RFC 3339), `amount`, `type` and
`category`; fields with a zero value other than the date are left out.

A storage error, a bad date or a bad `type` gives status 400 with the error in
`message`. A body that is not a JSON object, has a field of the wrong JSON type, or
misses a required field gives status 422, the message `Erro de validação`, and a
mapping from field to a list of messages in `payload`.

All responses carry CORS headers that allow the calling origin; `OPTIONS` requests
are answered with 204 and no body.

## Using it from Python

    from expensetracker.app import create_app
    from expensetracker.db import init_db
    from expensetracker.repo import ExpenseRepository

    conn = init_db("expenses.sqlite3")
    app = create_app(ExpenseRepository(conn))

`create_app(repository)` returns the Flask application, which can be served by any
WSGI server. `ExpenseRepository` offers `find`, `create`, `update`, `delete`, `list`
and `summary`; the last two take an `expensetracker.filters.ExpenseFilter`, which
`ExpenseFilter.from_query` builds from query parameters. `find` raises
`ExpenseNotFound`, and storage failures raise `expensetracker.db.DatabaseError`.

`expensetracker.validator.validate(data, rules)` checks a mapping against rules such
as `"required|between:4,10"` (`required`, `numeric`, `email`, `in`, `min`, `max`,
`between`) and raises `ValidationFailed` with the errors per field.

## What it does not do

- Storage is a single SQLite database; no other database server is supported, even
  though the setting is named `DB_POSTGRES_URL`.
- There is no authentication or access control; anyone who can reach the port can
  read and change every record.
- There is no schema versioning: an existing `expenses` table is used as it is.