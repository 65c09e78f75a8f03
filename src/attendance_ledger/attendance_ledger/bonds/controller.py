from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_date
from ..common.http import json_body, request_now
from ..common.payload import pick
from .calculator import calculate_bond_remaining
from .salary_breakdown import salary_breakdown
from .schema import bond_summary_to_dict, bonds_from_list, salary_row_to_dict


def register(app: Flask, container) -> None:
    @app.route("/api/bonds/remaining", methods=["POST"], endpoint="bonds_remaining")
    def bonds_remaining():
        data = json_body()
        summary = calculate_bond_remaining(
            bonds_from_list(pick(data, "bonds", default=[])),
            parse_date(pick(data, "joiningDate", "joining_date")),
            request_now(data),
        )
        return jsonify(bond_summary_to_dict(summary))

    @app.route("/api/bonds/salary-breakdown", methods=["POST"], endpoint="bonds_salary_breakdown")
    def bonds_salary_breakdown():
        data = json_body()
        rows = salary_breakdown(
            parse_date(pick(data, "joiningDate", "joining_date")),
            bonds_from_list(pick(data, "bonds", default=[])),
        )
        return jsonify({"rows": [salary_row_to_dict(r) for r in rows]})
