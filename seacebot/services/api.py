from __future__ import annotations
# seacebot/services/api.py

import asyncio
from typing import Any, Callable, Optional, Tuple

from flask import Flask, Response, jsonify, request

from seacebot.scrapers.base_scraper import FilterCriteria
from seacebot.utils.config import Config
from seacebot.utils.logger import logger

Runner = Callable[[FilterCriteria], Any]


def _default_runner(cfg: Config) -> Runner:
    def _run(criteria: FilterCriteria):
        from seacebot.seacebot import run_export
        # each request thread gets its own event loop and its own browser
        return asyncio.run(run_export(criteria, cfg))
    return _run


def _authorized(cfg: Config) -> bool:
    if not cfg.auth_token:
        return True
    return request.headers.get("Authorization", "") == f"Bearer {cfg.auth_token}"


def create_app(cfg: Optional[Config] = None, runner: Optional[Runner] = None) -> Flask:
    """HTTP wrapper around run_export: auth, presence checks, status mapping."""
    cfg = cfg or Config.load()
    runner = runner or _default_runner(cfg)
    app = Flask(__name__)

    @app.route("/health", methods=["GET"])
    def health() -> Response:
        return jsonify({"ok": True})

    @app.route("/seace/export", methods=["POST"])
    def seace_export() -> Tuple[Response, int]:
        if not _authorized(cfg):
            logger.warning("Rejected /seace/export: bad or missing bearer token")
            return jsonify({"error": "Unauthorized"}), 401

        payload = request.get_json(silent=True) or {}
        criteria = FilterCriteria.from_payload(payload)
        missing = criteria.missing()
        if missing:
            return jsonify({"error": "Missing parameters", "missing": missing}), 400

        outcome = runner(criteria)
        return jsonify(outcome.to_dict()), (200 if outcome.ok else 500)

    return app
