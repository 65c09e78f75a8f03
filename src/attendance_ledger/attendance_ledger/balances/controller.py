from __future__ import annotations

from flask import Flask, jsonify

from ..attendance.schema import records_from_list
from ..common.http import app_timezone, json_body, request_now
from ..common.payload import pick
from ..bonds.schema import employee_from_dict
from ..leaves.schema import holidays_from_list, leaves_from_list
from .schema import balance_to_dict, snapshot_to_dict


def _inputs(data: dict) -> dict:
    return {
        "employee": employee_from_dict(pick(data, "user", "employee", default={}) or {}),
        "leaves": leaves_from_list(pick(data, "leaves", default=[])),
        "records": records_from_list(pick(data, "records", default=[]), app_timezone()),
        "holidays": holidays_from_list(pick(data, "holidays", default=[])),
        "now": request_now(data),
    }


def register(app: Flask, container) -> None:
    @app.route("/api/balances/reconcile", methods=["POST"], endpoint="balances_reconcile")
    def balances_reconcile():
        balance = container.balance_service.current_balance(**_inputs(json_body()))
        return jsonify(balance_to_dict(balance))

    @app.route("/api/balances/close-month", methods=["POST"], endpoint="balances_close_month")
    def balances_close_month():
        snapshot = container.balance_service.close_month(**_inputs(json_body()))
        return jsonify(snapshot_to_dict(snapshot)), 201
