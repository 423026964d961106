# routes/score_routes.py - score summary and favorite clues
from flask import Blueprint, current_app, render_template, session

from services.scoring import score_summary
from services.session_helper import SessionHelper
from services.state_store import SnapshotStore

score_bp = Blueprint("score", __name__)


@score_bp.route("/score", methods=["GET"])
def score():
    """Score derived from the answered list on every read."""
    state = SnapshotStore().load(SessionHelper.snapshot_key(session))
    return score_summary(state.answered, state.favorites, current_app.config["ANSWER_CASE_SENSITIVE"])


@score_bp.route("/favorites", methods=["GET"])
def favorites():
    state = SnapshotStore().load(SessionHelper.snapshot_key(session))
    return render_template("favorites.html", favorites=state.favorites)
