"""HTTP API for expenses: routes, CORS handling and the service entry point."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Any

from flask import Flask, request

from .config import load_settings
from .db import DatabaseError, init_db
from .filters import ExpenseFilter, parse_int
from .repo import ExpenseRepository
from .response import Response
from .validator import ValidationFailed, validate

logger = logging.getLogger(__name__)

_JSON_CONTENT_TYPE = "application/json; charset=utf-8"
_ALLOWED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"

# Only these fields carry rules; the date is checked by the store instead.
_BODY_RULES = {"amount": "required", "type": "required", "category": "required"}

_BODY_TYPES: dict[str, tuple[type, ...]] = {
    "date": (str,),
    "amount": (int, float),
    "type": (str,),
    "category": (str,),
}


@dataclass(frozen=True)
class _ExpenseBody:
    date: str
    amount: float
    expense_type: str
    category: str


def _decode_body() -> _ExpenseBody:
    """Read and validate the JSON body of a create or update request."""
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed({"_error": ["request body must be a JSON object"]})
    for field, kinds in _BODY_TYPES.items():
        value = data.get(field)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, kinds):
            expected = "number" if field == "amount" else "string"
            raise ValidationFailed(
                {"_error": [f"cannot decode field {field}: expected a {expected}"]}
            )
    validate(data, _BODY_RULES)
    return _ExpenseBody(
        date=data.get("date") or "",
        amount=float(data.get("amount") or 0),
        expense_type=data.get("type") or "",
        category=data.get("category") or "",
    )


def create_app(repository: ExpenseRepository) -> Flask:
    """Build the Flask application serving the expense endpoints."""
    app = Flask(__name__)

    def reply(envelope: Response) -> Any:
        return app.response_class(
            envelope.to_json(),
            status=int(envelope.status),
            content_type=_JSON_CONTENT_TYPE,
        )

    @app.before_request
    def _preflight() -> Any:
        if request.method == "OPTIONS":
            return app.response_class(status=204)
        return None

    @app.after_request
    def _cors(response: Any) -> Any:
        origin = request.headers.get("Origin", "")
        if origin:
            response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = _ALLOWED_METHODS
        return response

    @app.errorhandler(ValidationFailed)
    def _invalid(exc: ValidationFailed) -> Any:
        return reply(Response.validation_error(exc.message, exc.errors))

    @app.errorhandler(DatabaseError)
    def _failed(exc: DatabaseError) -> Any:
        return reply(Response.bad_request(str(exc)))

    @app.get("/expenses")
    def list_expenses() -> Any:
        expense_filter = ExpenseFilter.from_query(request.args)
        models = repository.list(expense_filter)
        total_income, total_expense = repository.summary(expense_filter)
        return reply(
            Response(
                payload={
                    "total_income": total_income,
                    "total_expense": total_expense,
                    "data": models,
                }
            )
        )

    @app.get("/expenses/summary")
    def summary() -> Any:
        expense_filter = ExpenseFilter.from_query(request.args).as_summary()
        total_income, total_expense = repository.summary(expense_filter)
        return reply(
            Response(
                payload={"total_income": total_income, "total_expense": total_expense}
            )
        )

    @app.post("/expenses")
    def create() -> Any:
        body = _decode_body()
        expense = repository.create(
            body.date, body.amount, body.expense_type, body.category
        )
        return reply(Response(payload=expense))

    @app.put("/expenses/<expense_id>")
    def update(expense_id: str) -> Any:
        body = _decode_body()
        repository.update(
            parse_int(expense_id), body.date, body.amount, body.expense_type, body.category
        )
        return reply(Response(message="Model updated successfully"))

    @app.delete("/expenses/<expense_id>")
    def destroy(expense_id: str) -> Any:
        removed = repository.delete(parse_int(expense_id))
        return reply(Response(message=f"rows affected: {removed}"))

    return app


def main(argv: list[str] | None = None) -> int:
    """Load settings, prepare the database and serve the API until stopped."""
    parser = argparse.ArgumentParser(
        prog="expensetracker", description="Serve the expense tracking API."
    )
    parser.add_argument(
        "--env-file", default=".env", help="dotenv file to load if it exists"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    settings = load_settings(args.env_file)
    conn = init_db(settings.db_postgres_url)
    try:
        app = create_app(ExpenseRepository(conn))
        logger.info("\n\nServing on http://localhost:%s", settings.port)
        app.run(host="0.0.0.0", port=int(settings.port) if settings.port else 0)
    finally:
        conn.close()
    return 0