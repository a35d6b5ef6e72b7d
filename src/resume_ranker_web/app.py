"""Flask JSON API over the upload and scoring services."""

from __future__ import annotations

import json
from typing import Any

import structlog
from flask import Flask, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from resume_ranker_agents.observability import configure_logging
from resume_ranker_agents.services.scoring import ScoringService
from resume_ranker_agents.services.upload import ResumeUploadService
from resume_ranker_core.config.settings import Settings
from resume_ranker_core.exceptions import (
    ConfigurationError,
    InputValidationError,
    InvalidFileError,
    PreconditionError,
    ResumeNotFoundError,
    ResumeRankerError,
)
from resume_ranker_infra.storage.run_state_store import RunStateStore
from resume_ranker_web.schemas import EvaluateBody, ParseJobBody, ScoreBody

logger = structlog.get_logger()

_TRUTHY = {"1", "true", "yes", "on"}


def _failure(message: str, status: int, **extra: Any) -> tuple[Any, int]:
    return jsonify({"success": False, "error": message, **extra}), status


def create_app(settings: Settings | None = None) -> Flask:
    """Build the Flask application bound to one Settings instance."""
    settings = settings or Settings()  # type: ignore[call-arg]
    configure_logging(settings)

    app = Flask(__name__)
    # Leave headroom for multipart framing; the service enforces the exact limit.
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes + 1024 * 1024
    app.config["RESUME_RANKER_SETTINGS"] = settings

    upload_service = ResumeUploadService(settings)
    scoring_service = ScoringService(settings)
    run_state_store = RunStateStore(settings.storage_dir)

    @app.post("/api/parse")
    async def parse_job() -> Any:
        body = ParseJobBody.model_validate(request.get_json(silent=True) or {})
        posting = await scoring_service.parse_job(body.job_posting_text)
        return jsonify({"success": True, "data": posting.model_dump(mode="json")})

    @app.post("/api/resumes/upload")
    async def upload_resume() -> Any:
        file = request.files.get("resume")
        if file is None or not file.filename:
            msg = "No resume file provided. Use the 'resume' form field."
            raise InvalidFileError(msg)
        editable = request.form.get("editable", "false").strip().lower() in _TRUTHY
        summary = await upload_service.upload(file.filename, file.read(), editable=editable)
        return jsonify({"success": True, "resume": summary.model_dump(mode="json")})

    @app.get("/api/resumes")
    def list_resumes() -> Any:
        resumes = upload_service.list_resumes()
        return jsonify(
            {"success": True, "resumes": [r.model_dump(mode="json") for r in resumes]}
        )

    @app.post("/api/score")
    async def score() -> Any:
        body = ScoreBody.model_validate(request.get_json(silent=True) or {})
        result = await scoring_service.score(
            body.job_posting,
            threshold=body.threshold,
            resumes=body.resumes,
            resume_ids=body.resume_ids,
        )
        return jsonify({"success": True, "data": result.model_dump(mode="json")})

    @app.post("/api/evaluate")
    async def evaluate() -> Any:
        body = EvaluateBody.model_validate(request.get_json(silent=True) or {})
        result = await scoring_service.evaluate(
            job_posting=body.job_posting,
            job_posting_text=body.job_posting_text,
            threshold=body.threshold,
            resumes=body.resumes,
            resume_ids=body.resume_ids,
        )
        return jsonify({"success": True, "data": result.model_dump(mode="json")})

    @app.get("/api/run-state/latest")
    def latest_run_state() -> Any:
        state = run_state_store.get_latest()
        if state is None:
            return _failure("No scoring run has been saved yet.", 404)
        return jsonify({"success": True, "data": state.model_dump(mode="json")})

    _register_error_handlers(app)
    return app


def _register_error_handlers(app: Flask) -> None:
    """Map the exception hierarchy onto HTTP status codes."""

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError) -> Any:
        details = json.loads(e.json(include_url=False))
        return _failure("Invalid request payload.", 400, details=details)

    @app.errorhandler(InputValidationError)
    @app.errorhandler(PreconditionError)
    def handle_bad_request(e: ResumeRankerError) -> Any:
        return _failure(str(e), 400)

    @app.errorhandler(ResumeNotFoundError)
    def handle_not_found(e: ResumeNotFoundError) -> Any:
        return _failure(str(e), 404)

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(e: ConfigurationError) -> Any:
        logger.error("configuration_error", error=str(e))
        return _failure(str(e), 503)

    @app.errorhandler(ResumeRankerError)
    def handle_app_error(e: ResumeRankerError) -> Any:
        logger.error("request_failed", error_type=type(e).__name__, error=str(e))
        return _failure(str(e), 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException) -> Any:
        return _failure(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception) -> Any:
        logger.exception("unhandled_error", error_type=type(e).__name__)
        return _failure(str(e) or "Internal server error", 500)
