# routes/game_routes.py - searching, filtering, answering and favoriting clues
from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from services.category_resolver import CategoryResolver
from services.exceptions import RetrievalError, SearchInProgressError, ValidationError
from services.filters import parse_filters
from services.game_state import find_clue, record_answer, toggle_favorite_in_state, update_filters
from services.jservice_client import JServiceClient
from services.scoring import clue_status, is_favorite, make_hint, submitted_answer
from services.search_service import SearchService
from services.session_helper import SessionHelper
from services.state_store import SnapshotStore

game_bp = Blueprint("game", __name__)


def _search_service(store: SnapshotStore) -> SearchService:
    resolver = CategoryResolver(
        JServiceClient(), max_categories=current_app.config["MAX_CATEGORIES"]
    )
    return SearchService(resolver, store, lock_seconds=current_app.config["SEARCH_LOCK_SECONDS"])


def _run_search(key: str, text: str, store: SnapshotStore) -> None:
    """Run a search and turn its failures into flash messages."""
    try:
        state = _search_service(store).run(key, text)
    except ValidationError as e:
        flash(str(e), "error")
        return
    except SearchInProgressError as e:
        current_app.logger.info("search_rejected key=%s reason=in_progress", key)
        flash(str(e), "info")
        return
    except RetrievalError:
        current_app.logger.warning("search_retrieval_error key=%s query=%s", key, text)
        flash("Could not reach the trivia service. Please try again later.", "error")
        return
    current_app.logger.info(
        "search_done key=%s query=%s categories=%d", key, text, len(state.categories)
    )


def _safe_next(default: str) -> str:
    next_page = request.form.get("next")
    if next_page and next_page.startswith("/") and not next_page.startswith("//"):
        return next_page
    return default


@game_bp.route("/search", methods=["POST"])
def search():
    """Search categories for the submitted text and put them on the board."""
    text = request.form.get("search_text", "").strip()
    if not text:
        flash("Please enter a category to search.", "error")
        return redirect(url_for("main.index"))
    store = SnapshotStore()
    _run_search(SessionHelper.snapshot_key(session), text, store)
    return redirect(url_for("main.index"))


@game_bp.route("/filters", methods=["POST"])
def filters():
    """Update date/value filters and re-run the current search with them."""
    store = SnapshotStore()
    key = SessionHelper.snapshot_key(session)
    state = store.load(key)
    try:
        new_filters = parse_filters(request.form, state.filters)
    except ValidationError as e:
        flash(str(e), "error")
        return redirect(url_for("main.index"))

    store.save(key, update_filters(state, new_filters))
    current_app.logger.info("filters_updated key=%s filters=%s", key, new_filters.to_dict())
    if state.search_text:
        _run_search(key, state.search_text, store)
    return redirect(url_for("main.index"))


@game_bp.route("/clue/<int:clue_id>", methods=["GET"])
def show_clue(clue_id: int):
    """The flipped side of a card: question, answer form or the recorded answer."""
    state = SnapshotStore().load(SessionHelper.snapshot_key(session))
    clue = find_clue(state, clue_id)
    if clue is None:
        abort(404)
    status = clue_status(clue, state.answered, current_app.config["ANSWER_CASE_SENSITIVE"])
    return render_template(
        "clue.html",
        clue=clue,
        status=status,
        hint=make_hint(clue.answer),
        my_answer=submitted_answer(clue, state.answered),
        favorite=is_favorite(clue, state.favorites),
    )


@game_bp.route("/clue/<int:clue_id>/answer", methods=["POST"])
def answer_clue(clue_id: int):
    store = SnapshotStore()
    key = SessionHelper.snapshot_key(session)
    state = store.load(key)
    clue = find_clue(state, clue_id)
    if clue is None:
        abort(404)

    answer = request.form.get("answer", "")
    if not answer.strip():
        flash("Please enter an answer.", "error")
        return redirect(url_for("game.show_clue", clue_id=clue_id))

    try:
        state = record_answer(state, clue, answer)
    except ValidationError as e:
        flash(str(e), "info")
        return redirect(url_for("game.show_clue", clue_id=clue_id))

    store.save(key, state)
    current_app.logger.info(
        "clue_answered key=%s clue=%s status=%s",
        key,
        clue_id,
        clue_status(clue, state.answered, current_app.config["ANSWER_CASE_SENSITIVE"]),
    )
    return redirect(url_for("game.show_clue", clue_id=clue_id))


@game_bp.route("/clue/<int:clue_id>/favorite", methods=["POST"])
def favorite_clue(clue_id: int):
    store = SnapshotStore()
    key = SessionHelper.snapshot_key(session)
    state = store.load(key)
    clue = find_clue(state, clue_id)
    if clue is None:
        abort(404)
    state = toggle_favorite_in_state(state, clue)
    store.save(key, state)
    return redirect(_safe_next(url_for("game.show_clue", clue_id=clue_id)))
