"""Items — an in-memory JSON resource behind a superrouter App.

CRUD for a simple "items" resource. Demonstrates request decoding with
ContentNegotiation, a Router mounted between the negotiation routes,
path parameters, and error routes that turn failures into statuses.

There is no server here: a host hands requests to
``app.process_request()`` and writes back the response it returns.
"""

import threading
from dataclasses import dataclass

from superrouter import App, AppConfig, BodyParseError, ContentNegotiation, Router

app = App(AppConfig(error_policy="recover"))
router = Router()


# ---------------------------------------------------------------------------
# In-memory storage (thread-safe for free-threading)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    title: str
    done: bool


class NotFound(Exception):
    pass


_items: dict[int, Item] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


def _to_dict(item: Item) -> dict:
    return {"id": item.id, "title": item.title, "done": item.done}


def _lookup(ctx) -> Item:
    raw = ctx.request.route_params["item_id"]
    with _lock:
        item = _items.get(int(raw)) if raw.isdigit() else None
    if item is None:
        raise NotFound(raw)
    return item


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.route("/api/items", method="get")
def list_items(ctx):
    with _lock:
        all_items = sorted(_items.values(), key=lambda x: x.id)
    ctx.response.set_body({"data": [_to_dict(i) for i in all_items]})


@router.route("/api/items", method="post")
def create_item(ctx):
    data = ctx.request.get_body() or {}
    title = data.get("title") if isinstance(data, dict) else None
    if not title:
        ctx.response.status_code = 400
        ctx.response.set_body({"error": "title is required"})
        return
    item = Item(id=_get_next_id(), title=title, done=False)
    with _lock:
        _items[item.id] = item
    ctx.response.status_code = 201
    ctx.response.set_body(_to_dict(item))


@router.route("/api/items/:item_id", method="get")
def get_item(ctx):
    ctx.response.set_body(_to_dict(_lookup(ctx)))


@router.route("/api/items/:item_id", method="delete")
def delete_item(ctx):
    item = _lookup(ctx)
    with _lock:
        _items.pop(item.id, None)
    ctx.response.status_code = 204
    ctx.response.set_body(None)


def not_matched(ctx):
    if ctx.request.matched_route is None:
        ctx.response.status_code = 404
        ctx.response.set_body({"error": "no such route"})


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

app.use(ContentNegotiation.request)
router.mount(app)
app.use(not_matched)
app.use(ContentNegotiation.response)


def handle_error(ctx):
    match ctx.error:
        case NotFound():
            ctx.response.status_code = 404
            ctx.response.set_body({"error": "item not found"})
        case BodyParseError():
            ctx.response.status_code = 400
            ctx.response.set_body({"error": ctx.error.detail})
        case _:
            ctx.response.status_code = 500
            ctx.response.set_body({"error": "internal error"})


app.use_error(handle_error)
app.use_error(ContentNegotiation.response)
