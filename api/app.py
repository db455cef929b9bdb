"""Flask REST API exposing the expense tracker services."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from common.clock import Clock, local_today
from common.exceptions import RecordNotFoundError, StorageError, ValidationError
from common.services import ExpenseStore
from common.storage import SQLiteStorage
from common.validators import validate_expense_fields


def create_app(data_dir: Optional[Path] = None, clock: Clock = local_today) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("EXPENSE_TRACKER_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    data_path = Path(data_dir or os.getenv("EXPENSE_TRACKER_DATA_DIR", "data"))
    store = ExpenseStore(SQLiteStorage(data_path), clock=clock)
    store.initialize()
    app.extensions["expense_store"] = store

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(StorageError)
    def handle_storage_error(exc: StorageError):
        return _handle_error(exc, 500, "Storage error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _expense_fields(payload: Dict[str, Any]) -> Dict[str, object]:
        # The store ignores invalid input silently; check first so clients get a 400.
        return validate_expense_fields(
            payload.get("amount"),
            payload.get("category"),
            payload.get("note"),
            payload.get("date"),
            today=store.today(),
        )

    @app.get("/expenses")
    def list_expenses():
        records = store.filter(store.list(), request.args.get("filter") or "ALL")
        totals = store.totals(records)
        return _success({
            "items": [expense.to_dict() for expense in records],
            **totals.to_dict(),
        })

    @app.post("/expenses")
    def create_expense():
        fields = _expense_fields(_json_body())
        expense = store.add(**fields)
        return _success(expense.to_dict(), 201)

    @app.get("/expenses/<int:expense_id>")
    def get_expense(expense_id: int):
        return _success(store.get(expense_id).to_dict())

    @app.put("/expenses/<int:expense_id>")
    def update_expense(expense_id: int):
        store.get(expense_id)
        fields = _expense_fields(_json_body())
        store.update(expense_id, **fields)
        return _success(store.get(expense_id).to_dict())

    @app.delete("/expenses/<int:expense_id>")
    def delete_expense(expense_id: int):
        store.delete(expense_id)
        return _success({}, 204)

    return app
