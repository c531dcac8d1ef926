import json

import pytest
from pydantic import ValidationError

from jsonapi_doc.codec import decode_document, encode_document
from jsonapi_doc.config import get_settings
from jsonapi_doc.core import (
    DataBuilder,
    DocumentBuilder,
    ErrorBuilder,
    ErrorSourceBuilder,
    JsonApiBuilder,
    LinkBuilder,
    LinksBuilder,
    MetaBuilder,
    RelationshipBuilder,
    RelationshipsBuilder,
    ResourceBuilder,
)
from jsonapi_doc.exceptions import BuildError
from jsonapi_doc.schemas import (
    RESERVED_LINKS,
    Document,
    ErrorObject,
    ErrorSource,
    HttpStatus,
    JsonApi,
    LinkObject,
    Links,
    Relationship,
    Resource,
    Version,
)


def test_posts_with_author_end_to_end():
    post = ResourceBuilder("posts", 1).attr("title", "Hello").rel("author", ResourceBuilder("users", 9))
    document = (
        DocumentBuilder.for_resource(post)
        .with_links(LinksBuilder().with_self("http://example.com/posts/1"))
        .finish()
    )

    payload = json.loads(encode_document(document))

    assert payload["data"]["relationships"]["author"]["data"]["type"] == "users"
    assert payload["data"]["relationships"]["author"]["data"]["id"] == "9"
    assert payload["links"]["self"] == "http://example.com/posts/1"
    assert all(payload["links"][name] is None for name in RESERVED_LINKS if name != "self")


@pytest.mark.parametrize(
    ("builder_class", "entity"),
    [
        (LinkBuilder, "http://example.com"),
        (LinkBuilder, LinkObject(href="http://example.com")),
        (LinkBuilder, LinkObject(href="http://example.com", meta={"count": 1})),
        (LinksBuilder, Links.of({"self": "http://a", "custom": {"href": "http://c"}})),
        (MetaBuilder, {"nested": {"list": [1, 2]}, "flag": None}),
        (ResourceBuilder, Resource(type_="posts")),
        (RelationshipBuilder, Relationship(links=Links.of({"related": "http://r"}))),
        (RelationshipsBuilder, {"tags": Relationship(data=[])}),
        (DataBuilder, Resource(type_="posts", id="1")),
        (DataBuilder, []),
        (JsonApiBuilder, JsonApi(version=Version(1), meta={"a": 1})),
        (ErrorSourceBuilder, ErrorSource(parameter="sort")),
        (ErrorBuilder, ErrorObject(status=HttpStatus.CONFLICT, code="taken")),
        (DocumentBuilder, Document()),
    ],
)
def test_from_entity_finishes_to_the_same_entity(builder_class, entity):
    assert builder_class.from_entity(entity).finish() == entity


def test_documents_survive_builder_round_trip(post_raw, error_raw):
    for raw in (post_raw, error_raw):
        document = decode_document(raw)
        assert DocumentBuilder.from_entity(document).finish() == document


def test_setters_return_new_builders():
    base = ResourceBuilder("posts", "1")
    titled = base.attr("title", "Hello")
    linked = base.link("self", "http://example.com/posts/1")

    assert base.attributes is None
    assert base.links is None
    assert titled.finish().attributes == {"title": "Hello"}
    assert titled.finish().links is None
    assert linked.finish().links.self_ == "http://example.com/posts/1"


def test_pair_inserts_other_values_replace():
    resource = ResourceBuilder("posts").with_meta(("a", 1)).with_meta(("b", 2))
    assert resource.finish().meta == {"a": 1, "b": 2}
    assert resource.with_meta({"c": 3}).finish().meta == {"c": 3}

    links = DocumentBuilder().with_links(("self", "http://s")).with_links(("custom", "http://c"))
    assert links.finish().links == Links.of({"self": "http://s", "custom": "http://c"})


def test_reserved_names_go_to_their_slot():
    links = LinksBuilder().link("self", "http://a").link("self_", "http://b").link("next", "http://n")

    finished = links.finish()
    assert finished.self_ == "http://b"
    assert finished.next == "http://n"
    assert finished.other == {}

    with pytest.raises(ValidationError):
        LinksBuilder(other={"self": LinkBuilder("http://a")})


def test_decoded_self_underscore_stays_extra_through_builder():
    links = decode_document(
        b'{"links": {"self": "http://a", "self_": "http://b"}, "meta": {}}'
    ).links

    builder = LinksBuilder.from_entity(links)
    assert builder.self_ == LinkBuilder("http://a")
    assert builder.other == {"self_": LinkBuilder("http://b")}
    assert builder.finish() == links


def test_link_with_meta_becomes_object():
    assert LinkBuilder("http://a").finish() == "http://a"
    assert LinkBuilder("http://a").meta_item("count", 1).finish() == LinkObject(
        href="http://a", meta={"count": 1}
    )


def test_meta_is_copied_in():
    items = {"nested": {"a": 1}}
    builder = MetaBuilder.from_entity(items)
    items["nested"]["a"] = 2

    assert builder.finish() == {"nested": {"a": 1}}
    assert MetaBuilder().item("x", 1).item("y", 2).finish() == {"x": 1, "y": 2}


def test_collection_builder_appends():
    data = DataBuilder.multiple().resource(ResourceBuilder("a")).resource(Resource(type_="b"))

    assert data.finish() == [Resource(type_="a"), Resource(type_="b")]
    assert DocumentBuilder().with_data([]).finish().data == []


def test_error_builder():
    error = (
        ErrorBuilder()
        .with_status(404)
        .with_title("Not Found")
        .pointer("/data/id")
        .meta_item("k", 1)
        .finish()
    )

    assert error == ErrorObject(
        status=HttpStatus.NOT_FOUND,
        title="Not Found",
        source=ErrorSource(pointer="/data/id"),
        meta={"k": 1},
    )
    with pytest.raises(ValueError):
        ErrorBuilder().with_status(999)


def test_error_document():
    document = (
        DocumentBuilder.for_errors([ErrorBuilder().with_code("a")])
        .error(ErrorObject(code="b"))
        .with_jsonapi(Version.default())
        .finish()
    )

    assert [error.code for error in document.errors] == ["a", "b"]
    assert document.jsonapi == JsonApi(version=Version(0))


def test_relationship_shorthand():
    single = RelationshipBuilder.coerce(Resource(type_="users", id="9")).finish()
    many = RelationshipBuilder.coerce([ResourceBuilder("tags", 1)]).finish()

    assert single == Relationship(data=Resource(type_="users", id="9"))
    assert many == Relationship(data=[Resource(type_="tags", id="1")])


@pytest.mark.parametrize(
    "call",
    [
        lambda: DocumentBuilder().with_data(42),
        lambda: DocumentBuilder().with_data("posts"),
        lambda: DocumentBuilder().with_jsonapi("1.0"),
        lambda: JsonApiBuilder().with_version("1.0"),
        lambda: LinksBuilder.coerce(3),
        lambda: MetaBuilder.coerce(["a"]),
        lambda: ResourceBuilder("posts").with_relationships(["author"]),
    ],
)
def test_unsupported_conversions_raise(call):
    with pytest.raises(TypeError):
        call()


def test_finish_fails_fast_with_path():
    builder = DocumentBuilder.for_collection(
        [
            ResourceBuilder("posts", "1"),
            ResourceBuilder("posts", "2").rel("author", ResourceBuilder("")),
        ]
    )

    with pytest.raises(BuildError) as excinfo:
        builder.finish()
    assert excinfo.value.path == 'data[1].relationships["author"].data.type'
    assert str(excinfo.value).startswith('data[1].relationships["author"].data.type: ')


def test_resource_error_names_the_wire_member():
    with pytest.raises(BuildError) as excinfo:
        ResourceBuilder("", "1").finish()
    assert excinfo.value.path == "type"


def test_finish_depth_ceiling(monkeypatch):
    monkeypatch.setenv("JSONAPI_MAX_DEPTH", "3")
    get_settings.cache_clear()
    builder = DocumentBuilder.for_resource(
        ResourceBuilder("posts").rel("author", ResourceBuilder("users"))
    )

    with pytest.raises(BuildError) as excinfo:
        builder.finish()
    assert excinfo.value.path == 'data.relationships["author"]'
