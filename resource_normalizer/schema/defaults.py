"""Built-in schemas for the blogging API (articles, authors, profiles, tags)."""

from .models import FieldDeclaration, FieldKind, ResourceSchema
from .registry import SchemaRegistry


def _field(name: str) -> FieldDeclaration:
    return FieldDeclaration(kind=FieldKind.FIELD, name=name)


ARTICLE_SCHEMA = ResourceSchema(
    type="article",
    fields=[
        _field("body"),
        _field("description"),
        _field("favorited"),
        _field("favoritesCount"),
        _field("slug"),
        _field("title"),
        _field("tagList"),
        FieldDeclaration(
            kind=FieldKind.BELONGS_TO,
            name="author",
            type="user",
            options={"async": False, "inverse": None, "polymorphic": False, "linksMode": True},
        ),
        _field("updatedAt"),
        _field("createdAt"),
    ],
)

USER_SCHEMA = ResourceSchema(
    type="user",
    fields=[_field("username"), _field("bio"), _field("image"), _field("following")],
)

PROFILE_SCHEMA = ResourceSchema(
    type="profile",
    fields=[_field("username"), _field("bio"), _field("image"), _field("following")],
)

TAG_SCHEMA = ResourceSchema(type="tag", fields=[_field("name")])

DEFAULT_SCHEMAS = (ARTICLE_SCHEMA, USER_SCHEMA, PROFILE_SCHEMA, TAG_SCHEMA)


def default_registry() -> SchemaRegistry:
    """Return a fresh registry holding the built-in schemas."""
    return SchemaRegistry(DEFAULT_SCHEMAS)
