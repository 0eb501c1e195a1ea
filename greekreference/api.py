import json
import logging

from aiohttp import web

logger = logging.getLogger("GreekReference")

from .db import ReferenceStore
from .errors import InvariantViolation, PreconditionFailure
from .history import LexiconFavorites, LexiconHistory
from .presenter import Presenter
from .utils import normalize_text, to_int
from .view import CollectingView

REFERENCE_STORE = web.AppKey("reference_store", ReferenceStore)
HISTORY = web.AppKey("history", LexiconHistory)
FAVORITES = web.AppKey("favorites", LexiconFavorites)

routes = web.RouteTableDef()


def _json_response(obj, status=200):
    return web.Response(
        status=status,
        text=json.dumps(obj, ensure_ascii=False),
        content_type="application/json",
    )


def _bad_request(msg):
    return _json_response({"error": msg}, status=400)


def _not_found(msg):
    return _json_response({"error": msg}, status=404)


def _presenter(request):
    view = CollectingView()
    app = request.app
    return Presenter(view, app[REFERENCE_STORE], app[HISTORY], app[FAVORITES]), view


def _result(result, view):
    return _json_response({"result": result, "events": view.events})


def _path_id(request, name):
    try:
        return to_int(request.match_info[name]), None
    except ValueError:
        return None, _bad_request(f"{name} must be an integer")


@routes.get("/greekreference/health")
async def health(request):
    store = request.app[REFERENCE_STORE]
    return _json_response(
        {
            "ok": True,
            "reference_db_path": store.db_path,
            "app_data_db_path": request.app[HISTORY].db_path,
            "lexicon_entries": store.count_lexicon(),
            "syntax_sections": store.count_syntax(),
        }
    )


@routes.get("/greekreference/search")
async def search(request):
    q = normalize_text(request.query.get("q", ""))
    if not q:
        return _bad_request("missing q")
    presenter, view = _presenter(request)
    outcome = presenter.search(q)
    return _result(outcome.to_dict(), view)


@routes.get("/greekreference/resolve")
async def resolve(request):
    presenter, view = _presenter(request)
    try:
        entry = presenter.resolve_by_reference(request.query.get("ref", ""))
    except PreconditionFailure as exc:
        return _bad_request(str(exc))
    except InvariantViolation as exc:
        return _not_found(str(exc))
    return _result(entry.to_dict(), view)


@routes.get("/greekreference/lexicon/{entry_id}")
async def get_lexicon_entry(request):
    entry_id, err = _path_id(request, "entry_id")
    if err is not None:
        return err
    presenter, view = _presenter(request)
    try:
        payload = presenter.select_lexicon_entry(entry_id)
    except InvariantViolation as exc:
        return _not_found(str(exc))
    return _result(payload.to_dict(), view)


@routes.get("/greekreference/syntax")
async def list_syntax_sections(request):
    return _json_response({"items": request.app[REFERENCE_STORE].list_syntax_sections()})


@routes.get("/greekreference/syntax/{entry_id}")
async def get_syntax_entry(request):
    entry_id, err = _path_id(request, "entry_id")
    if err is not None:
        return err
    presenter, view = _presenter(request)
    try:
        payload = presenter.select_syntax_entry(entry_id)
    except InvariantViolation as exc:
        return _not_found(str(exc))
    return _result(payload.to_dict(), view)


@routes.get("/greekreference/history")
async def list_history(request):
    presenter, _view = _presenter(request)
    return _json_response({"items": [item.to_dict() for item in presenter.history()]})


@routes.post("/greekreference/history")
async def add_history(request):
    try:
        payload = await request.json()
    except json.JSONDecodeError:
        return _bad_request("invalid JSON")
    if not isinstance(payload, dict):
        return _bad_request("request body must be a JSON object")
    word = normalize_text(payload.get("word"))
    try:
        entry_id = to_int(payload.get("id"))
    except ValueError:
        return _bad_request("id must be an integer")
    if not word:
        return _bad_request("missing word")
    presenter, _view = _presenter(request)
    item = presenter.add_to_history(entry_id, word)
    return _json_response(item.to_dict(), status=201)


@routes.delete("/greekreference/history")
async def clear_history(request):
    presenter, _view = _presenter(request)
    return _json_response({"deleted": presenter.clear_history()})


@routes.get("/greekreference/favorites")
async def list_favorites(request):
    presenter, _view = _presenter(request)
    return _json_response({"items": [item.to_dict() for item in presenter.favorites()]})


@routes.delete("/greekreference/favorites")
async def clear_favorites(request):
    presenter, _view = _presenter(request)
    return _json_response({"deleted": presenter.clear_favorites()})


@routes.post("/greekreference/favorites/{lexicon_id}")
async def add_favorite(request):
    lexicon_id, err = _path_id(request, "lexicon_id")
    if err is not None:
        return err
    presenter, _view = _presenter(request)
    try:
        item = presenter.add_favorite(lexicon_id)
    except InvariantViolation as exc:
        return _not_found(str(exc))
    return _json_response(item.to_dict(), status=201)


@routes.delete("/greekreference/favorites/{lexicon_id}")
async def remove_favorite(request):
    lexicon_id, err = _path_id(request, "lexicon_id")
    if err is not None:
        return err
    presenter, _view = _presenter(request)
    if not presenter.remove_favorite(lexicon_id):
        return _not_found("not a favorite")
    return _json_response({"removed": lexicon_id})


def create_app(reference_store=None, history=None, favorites=None):
    app = web.Application()
    app[REFERENCE_STORE] = reference_store or ReferenceStore.get()
    app[HISTORY] = history or LexiconHistory()
    app[FAVORITES] = favorites or LexiconFavorites(app[HISTORY].db_path)
    app.add_routes(routes)
    logger.info("API routes registered successfully")
    return app
