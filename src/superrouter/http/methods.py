"""Method and path normalization shared by Request, Route, and RouteTree."""

METHODS: frozenset[str] = frozenset(
    {"get", "post", "put", "delete", "patch", "head", "options"}
)

# Route-only spelling for "any method"
ALL = "all"


def is_valid_method(method: object) -> bool:
    """True if *method* names one of the supported request methods."""
    return isinstance(method, str) and method.lower() in METHODS


def normalize_method(method: str) -> str:
    return method.lower()


def normalize_path(path: str) -> str:
    """Lowercase *path*, ensure a leading slash, drop the trailing one.

    ``"/WoNkY/"`` -> ``"/wonky"``; the root stays ``"/"``.
    """
    path = path.strip().lower()
    if not path.startswith("/"):
        path = "/" + path
    stripped = path.rstrip("/")
    return stripped or "/"


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty ``/``-separated segments."""
    return [part for part in path.split("/") if part]
