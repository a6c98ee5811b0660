from typing import Any, Iterator, Mapping, MutableMapping


def text_field(meta: Mapping[str, Any], key: str) -> str | None:
    """Read a scalar front matter value as trimmed text, None if blank or absent."""
    value = meta.get(key)
    # YAML turns `id: 2024` into an int; bools never count as text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def list_field(meta: Mapping[str, Any], key: str) -> list[str] | None:
    """Read a list-valued front matter key; a bare string counts as one item."""
    value = meta.get(key)
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [v if isinstance(v, str) else str(v) for v in value]
    return None


class NoteFrontmatter(MutableMapping[str, Any]):
    """
    Raw front matter of a note, every key preserved as parsed.

    Keys the route builder understands are exposed as read-only properties:
    - "id", "title", "slug": text (numbers are read as their string form)
    - "publishedAt", "updatedAt": date-like strings or YAML dates
    - "isPublished", "showToc": booleans
    - "tags", "type", "surfaces": lists of strings
    - "coverImage": text
    Nothing here is required; an empty bag is a valid note.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._d = dict(initial or {})

    # MutableMapping interface
    def __getitem__(self, k: str) -> Any:
        return self._d[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self._d[k] = v

    def __delitem__(self, k: str) -> None:
        del self._d[k]

    def __iter__(self) -> Iterator[str]:
        return iter(self._d)

    def __len__(self) -> int:
        return len(self._d)

    def __repr__(self) -> str:
        return f"NoteFrontmatter({self._d!r})"

    @property
    def id(self) -> str | None:
        return text_field(self._d, "id")

    @property
    def title(self) -> str | None:
        return text_field(self._d, "title")

    @property
    def slug(self) -> str | None:
        return text_field(self._d, "slug")

    @property
    def published_at(self) -> Any:
        return self._d.get("publishedAt")

    @property
    def updated_at(self) -> Any:
        return self._d.get("updatedAt")

    @property
    def is_published(self) -> bool | None:
        v = self._d.get("isPublished")
        return v if isinstance(v, bool) else None

    @property
    def show_toc(self) -> bool | None:
        v = self._d.get("showToc")
        return v if isinstance(v, bool) else None

    @property
    def tags(self) -> list[str]:
        return list_field(self._d, "tags") or []

    @property
    def type(self) -> list[str]:
        return list_field(self._d, "type") or []

    @property
    def cover_image(self) -> str | None:
        return text_field(self._d, "coverImage")

    @property
    def surfaces(self) -> list[str]:
        return list_field(self._d, "surfaces") or []
