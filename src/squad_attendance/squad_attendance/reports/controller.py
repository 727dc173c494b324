from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.serialization import to_jsonable
from ..common.validators import require_choice
from ..common.web import cron_required, current_actor, json_errors, ok, roles_required
from ..container import Container
from ..core.enums import ComplianceStatus, ReportFrequency, Role
from ..core.exceptions import ValidationError
from .model import ReportAutomation, ReportFilters


def _parse_date(value, field_name: str):
    try:
        return parse_iso_date(value or "")
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def _parse_filters(data: dict) -> ReportFilters:
    return ReportFilters(
        squad_ids=tuple(int(v) for v in data.get("squad_ids") or ()),
        user_ids=tuple(int(v) for v in data.get("user_ids") or ()),
        compliance_statuses=tuple(
            require_choice(v, ComplianceStatus, "compliance status") for v in data.get("compliance_statuses") or ()
        ),
    )


def _parse_automation(data: dict) -> ReportAutomation:
    frequency = data.get("frequency")
    return ReportAutomation(
        auto_generate=bool(data.get("auto_generate")),
        frequency=require_choice(frequency, ReportFrequency, "frequency") if frequency else None,
        email_recipients=tuple(str(e).strip().lower() for e in data.get("email_recipients") or ()),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/export", methods=["GET"], endpoint="api_reports_export")
    @roles_required(Role.ADMIN, Role.SQUAD_LEAD, Role.VIEWER)
    @json_errors
    def export():
        squad = request.args.get("squad")
        if squad is not None and not squad.isdigit():
            raise ValidationError("squad must be a numeric id")

        file = container.export_service.export(
            format=request.args.get("format", "csv"),
            period=request.args.get("period", "month"),
            squad_id=int(squad) if squad else None,
        )
        return app.response_class(
            file.content,
            mimetype=file.mimetype,
            headers={"Content-Disposition": f'attachment; filename="{file.filename}"'},
        )

    @app.route("/api/reports/automated", methods=["POST"], endpoint="api_reports_run")
    @cron_required
    @json_errors
    def run_reports():
        report_id = request.args.get("reportId")
        if report_id:
            if not report_id.isdigit():
                raise ValidationError("reportId must be a numeric id")
            metrics = container.report_service.generate(int(report_id))
            return ok({"metrics": to_jsonable(metrics)})

        result = container.report_service.run_scheduled()
        return ok(
            {
                "message": f"Processed {result.processed_reports} scheduled reports",
                "processed_reports": result.processed_reports,
                "failures": list(result.failures),
            }
        )

    @app.route("/api/reports/automated", methods=["GET"], endpoint="api_reports_scheduled")
    @roles_required(Role.ADMIN, Role.SQUAD_LEAD)
    @json_errors
    def scheduled():
        items = container.report_service.list_scheduled()
        return ok({"scheduled_reports": items, "total_scheduled": len(items)})

    @app.route("/api/reports", methods=["POST"], endpoint="api_reports_create")
    @roles_required(Role.ADMIN, Role.SQUAD_LEAD)
    @json_errors
    def create_report():
        data = request.get_json(silent=True) or {}
        report = container.report_service.create_report(
            current_actor(),
            title=data.get("title", ""),
            report_type=data.get("report_type", ""),
            start_date=_parse_date(data.get("start_date"), "start_date"),
            end_date=_parse_date(data.get("end_date"), "end_date"),
            filters=_parse_filters(data.get("filters") or {}),
            automation=_parse_automation(data.get("automation") or {}),
        )
        return ok({"report": to_jsonable(report)}, 201)
