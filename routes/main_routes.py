# routes/main_routes.py - the game board
from flask import Blueprint, current_app, render_template, session

from services.scoring import clue_status, is_favorite, score_summary
from services.session_helper import SessionHelper
from services.state_store import SnapshotStore
from services.trivia_types import DIFFICULTIES

main_bp = Blueprint("main", __name__)


def _board_cards(state, per_card: int, case_sensitive: bool):
    """Category cards with only the first `per_card` clues, easiest on top."""
    cards = []
    for category in state.categories:
        clues = [
            {
                "clue": clue,
                "status": clue_status(clue, state.answered, case_sensitive),
                "favorite": is_favorite(clue, state.favorites),
            }
            for clue in category.clues[:per_card]
        ]
        cards.append({"title": category.title, "clues": clues})
    return cards


@main_bp.route("/", methods=["GET"])
def index():
    """Board page: score, search box, filters and category cards."""
    state = SnapshotStore().load(SessionHelper.snapshot_key(session))
    case_sensitive = current_app.config["ANSWER_CASE_SENSITIVE"]
    no_results = (
        state.results_for is not None and not state.categories and not state.last_error
    )
    return render_template(
        "index.html",
        state=state,
        cards=_board_cards(state, current_app.config["CLUES_PER_CARD"], case_sensitive),
        score=score_summary(state.answered, state.favorites, case_sensitive),
        difficulties=DIFFICULTIES,
        no_results=no_results,
    )
